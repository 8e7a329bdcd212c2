"""Base exception for termdom.

Concrete errors live next to the code that raises them and inherit from
``TermdomError`` so callers can catch everything from this package at once.
"""

from __future__ import annotations


class TermdomError(Exception):
    """Root of all termdom exceptions."""
