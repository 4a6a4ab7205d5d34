"""Record layout analysis CLI command."""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path

from ..models.base import VmxModel
from ..utils.layout import key_layout

logger = logging.getLogger(__name__)


def analyze_file(file_path: Path) -> None:
    """Analyze all VmxModel classes in a Python file.

    Args:
        file_path: Path to Python file containing record definitions
    """
    # Load the Python module
    spec = importlib.util.spec_from_file_location("user_module", file_path)
    if spec is None or spec.loader is None:
        raise ValueError(f"Could not load module from {file_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules["user_module"] = module
    spec.loader.exec_module(module)

    # Find all VmxModel subclasses defined in this file (not imported)
    record_classes = [
        obj
        for _name, obj in inspect.getmembers(module, inspect.isclass)
        if obj is not VmxModel and issubclass(obj, VmxModel) and obj.__module__ == "user_module"
    ]
    logger.debug("Found %d records in %s", len(record_classes), file_path)

    if not record_classes:
        print(f"No VmxModel classes found in {file_path}")
        return

    print("|" * 7, "vmxcodec: VMX Configuration Codec", "|" * 7)
    print(f"{len(record_classes)} record{'s' if len(record_classes) != 1 else ''} loaded.")
    print("Repeated groups are shown with an {n} index.")
    print()

    for record_class in record_classes:
        analyze_record_class(record_class)


def analyze_record_class(record_class: type[VmxModel]) -> None:
    """Print the key layout of a single record class.

    Args:
        record_class: Record class to analyze
    """
    print(f"{'=' * 19} {record_class.__name__} {'=' * 19}")

    specs = key_layout(record_class)
    if not specs:
        print("        (no tagged fields)")
        print()
        return

    for i, key_spec in enumerate(specs, 1):
        key_desc = f"{i}. {key_spec.path}"
        info = key_spec.type_name + (", omitempty" if key_spec.omitempty else "")
        dots = "." * max(1, 54 - len(key_desc) - len(info))
        print(f"        {key_desc}{dots}{info}")

    print()
    print(f"{len(specs)} key{'s' if len(specs) != 1 else ''}")
    print()
