"""Weave orchestration.

This module wires download, ingestion, validation and output into the
strings and analytics pipelines.
"""
