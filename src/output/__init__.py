"""Platform output layer.

This module renders verified strands into Android, iOS and Web source
files with each platform's escaping and layout rules.
"""
