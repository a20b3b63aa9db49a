"""CSV ingestion.

This module downloads configured CSV sources and parses their rows into
strands for the validation and output layers.
"""
