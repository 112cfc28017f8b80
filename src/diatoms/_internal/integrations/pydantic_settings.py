from __future__ import annotations

import importlib
from typing import Any


def _load_base_settings(module_name: str) -> type[Any] | None:
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    base_settings = getattr(module, "BaseSettings", None)
    if isinstance(base_settings, type):
        return base_settings
    return None


SETTINGS_BASE: type[Any] | None = _load_base_settings("pydantic_settings")


def is_pydantic_settings_subclass(candidate: object) -> bool:
    """Return true when candidate subclasses ``pydantic_settings.BaseSettings``.

    Settings classes populate their fields from the environment, so the
    container constructs them with no arguments instead of resolving fields.
    """
    if SETTINGS_BASE is None or not isinstance(candidate, type):
        return False
    return issubclass(candidate, SETTINGS_BASE)


__all__ = [
    "SETTINGS_BASE",
    "is_pydantic_settings_subclass",
]
