"""Pilot registry.

Every public module in this package is a pilot and exposes a module-level
``create_pilot()`` factory returning a ``lunar.pilot.Pilot``.
"""

from __future__ import annotations

import importlib
import pkgutil
from typing import Callable, List

from lunar.pilot import Pilot


def list_available_pilots() -> List[str]:
    """Sorted pilot module names; modules starting with ``_`` are helpers."""
    return sorted(
        info.name for info in pkgutil.iter_modules(__path__) if not info.name.startswith("_")
    )


def _normalize(name: str) -> str:
    module_name = name.strip().lower().replace("-", "_")
    if not module_name.isidentifier() or module_name.startswith("_"):
        raise ValueError(f"Invalid pilot name: {name!r}")
    if module_name not in list_available_pilots():
        known = ", ".join(list_available_pilots())
        raise ValueError(f"Unknown pilot: {name!r} (available: {known})")
    return module_name


def _factory(name: str) -> Callable[[], Pilot]:
    module = importlib.import_module(f"{__name__}.{_normalize(name)}")
    factory = getattr(module, "create_pilot", None)
    if not callable(factory):
        raise ValueError(f"Pilot module {module.__name__!r} has no create_pilot()")
    return factory


def create_pilot(name: str) -> Pilot:
    pilot = _factory(name)()
    if not isinstance(pilot, Pilot):
        raise ValueError(f"create_pilot() for {name!r} returned {type(pilot).__name__}")
    return pilot


__all__ = [
    "list_available_pilots",
    "create_pilot",
]
