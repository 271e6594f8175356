"""Base exception for awfi."""

from __future__ import annotations


class AwfiError(Exception):
    """Base class for errors raised by awfi."""
