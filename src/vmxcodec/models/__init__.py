"""Pydantic record modeling for vmxcodec.

This module provides the VmxModel base class and field helpers for attaching
vmx tags to model fields.
"""

from __future__ import annotations

from .base import VmxModel
from .fields import VmxKey, VmxTag

__all__ = [
    "VmxModel",
    "VmxKey",
    "VmxTag",
]
