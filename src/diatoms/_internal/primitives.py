from __future__ import annotations

import datetime
import decimal
import pathlib
import uuid
from dataclasses import dataclass
from typing import Any

from diatoms._internal.type_checks import is_runtime_class


@dataclass(frozen=True, slots=True)
class PrimitiveTypePolicy:
    """Internal policy deciding which declared types the container never builds."""

    ignored_base_types: tuple[type[Any], ...] = (
        pathlib.PurePath,
        datetime.datetime,
        datetime.date,
        datetime.time,
        datetime.timedelta,
        uuid.UUID,
        decimal.Decimal,
    )

    def is_primitive(self, candidate: object) -> bool:
        """Return true when a declared type must be satisfied by a default or override.

        Args:
            candidate: Unwrapped type hint of a constructor parameter.

        """
        if not is_runtime_class(candidate):
            return True
        if candidate.__module__ == "builtins":
            return True
        if issubclass(candidate, type):
            return True
        return issubclass(candidate, self.ignored_base_types)
