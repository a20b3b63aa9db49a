"""Weave exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Every fatal condition is raised as a subclass of ``WeaveError`` and
left to the CLI to turn into a process exit code.
"""

from __future__ import annotations


class WeaveError(Exception):
    """Base exception for all Weave failures."""


class WeaveConfigError(WeaveError):
    """Raised for invalid or missing configuration."""


class WeaveIngestError(WeaveError):
    """Raised when a CSV source cannot be parsed into strands."""


class WeaveOutputError(WeaveError):
    """Raised when a generated file cannot be written."""


class WeaveDependencyError(WeaveError):
    """Raised when an optional runtime dependency is missing."""
