"""Utility functions for vmxcodec.

This module provides inspection helpers for record classes.
"""

from __future__ import annotations

from .layout import KeySpec, key_layout

__all__ = [
    "KeySpec",
    "key_layout",
]
