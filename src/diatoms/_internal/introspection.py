from __future__ import annotations

import enum
import importlib
import inspect
import logging
from dataclasses import dataclass, field
from inspect import Parameter
from typing import Any, get_type_hints

from diatoms._internal.integrations.pydantic_settings import is_pydantic_settings_subclass
from diatoms._internal.primitives import PrimitiveTypePolicy
from diatoms._internal.type_checks import is_runtime_class, unwrap_annotation
from diatoms.exceptions import NotFoundError

logger = logging.getLogger(__name__)

_VARIADIC_KINDS = (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD)


def type_identifier(cls: type[Any]) -> str:
    """Return the abstract identifier the container uses for a class."""
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


@dataclass(frozen=True, slots=True)
class ParameterInfo:
    """Read-only facts about one constructor parameter."""

    name: str
    kind: Any = Parameter.POSITIONAL_OR_KEYWORD
    declared_type: str | None = None
    has_default: bool = False
    default: Any = None
    owner: str | None = None


@dataclass(slots=True)
class TypeIntrospector:
    """Locate classes by identifier and describe their constructors.

    Classes handed to the container are remembered under their identifier, so
    classes defined in function scopes remain locatable even though they cannot
    be imported. Other identifiers are treated as dotted import paths
    (``"package.module.Class"``).
    """

    primitive_policy: PrimitiveTypePolicy = field(default_factory=PrimitiveTypePolicy)
    _types: dict[str, type[Any]] = field(default_factory=dict)
    _identifiers: dict[type[Any], str] = field(default_factory=dict)
    _parameters: dict[type[Any], tuple[ParameterInfo, ...]] = field(default_factory=dict)

    def register(self, cls: type[Any]) -> str:
        """Remember a class and return its identifier.

        The first class seen under a qualified name owns that name. A different
        class with the same qualified name (a redefinition, or a class built by a
        factory function) gets the name suffixed with ``@<id>``, so distinct
        classes never share bindings or cached instances.
        """
        known = self._identifiers.get(cls)
        if known is not None:
            return known

        identifier = type_identifier(cls)
        owner = self._types.get(identifier)
        if owner is not None and owner is not cls:
            identifier = f"{identifier}@{id(cls):#x}"
            logger.debug("Class %r shadows a known class; registered as %s", cls, identifier)

        self._types[identifier] = cls
        self._identifiers[cls] = identifier
        return identifier

    def locate(self, name: str) -> type[Any] | None:
        """Return the class named by an identifier, or ``None`` when there is none."""
        known = self._types.get(name)
        if known is not None:
            return known

        candidate = self._import_path(name)
        if not is_runtime_class(candidate):
            return None
        logger.debug("Located %s by import path", name)
        self._types[name] = candidate
        self._identifiers.setdefault(candidate, name)
        return candidate

    def is_instantiable(self, cls: object) -> bool:
        """Return true when calling the class can produce an instance."""
        if not is_runtime_class(cls):
            return False
        if inspect.isabstract(cls):
            return False
        if getattr(cls, "_is_protocol", False):
            return False
        return not issubclass(cls, (type, enum.Enum))

    def get_constructor_parameters(self, cls: type[Any]) -> tuple[ParameterInfo, ...]:
        """Describe the non-variadic constructor parameters of a class, in order.

        ``__init__`` is inspected, or ``__new__`` when only ``__new__`` is
        overridden (``NamedTuple`` classes, for example).

        An empty tuple means the class is constructed with no arguments.

        Raises:
            NotFoundError: If the constructor annotations cannot be evaluated.

        """
        cached = self._parameters.get(cls)
        if cached is not None:
            return cached

        parameters = self._extract_parameters(cls)
        self._parameters[cls] = parameters
        return parameters

    def _extract_parameters(self, cls: type[Any]) -> tuple[ParameterInfo, ...]:
        if is_pydantic_settings_subclass(cls):
            return ()

        constructor = self._constructor(cls)
        if constructor is None:
            return ()

        try:
            signature = inspect.signature(constructor)
        except (ValueError, TypeError):
            return ()

        owner = self.register(cls)
        try:
            hints = get_type_hints(constructor)
        except (AttributeError, NameError, TypeError) as error:
            msg = f"The constructor of {owner} could not be introspected: {error}"
            raise NotFoundError(msg, abstract=owner) from error

        parameters = list(signature.parameters.values())[1:]
        return tuple(
            ParameterInfo(
                name=parameter.name,
                kind=parameter.kind,
                declared_type=self._declared_type(hints.get(parameter.name)),
                has_default=parameter.default is not Parameter.empty,
                default=None if parameter.default is Parameter.empty else parameter.default,
                owner=owner,
            )
            for parameter in parameters
            if parameter.kind not in _VARIADIC_KINDS
        )

    def _constructor(self, cls: type[Any]) -> Any | None:
        """Return the callable whose first parameter is the instance or the class."""
        if cls.__init__ is not object.__init__:
            return cls.__init__
        if cls.__new__ is not object.__new__:
            return cls.__new__
        return None

    def _declared_type(self, annotation: Any) -> str | None:
        if annotation is None:
            return None
        annotation = unwrap_annotation(annotation)
        if self.primitive_policy.is_primitive(annotation):
            return None
        return self.register(annotation)

    def _import_path(self, name: str) -> object | None:
        parts = name.split(".")
        if not all(parts):
            return None
        for split in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:split])
            try:
                target: object = importlib.import_module(module_name)
            except ImportError:
                continue
            except Exception:  # noqa: BLE001
                logger.debug(
                    "Importing %s failed while locating %s",
                    module_name,
                    name,
                    exc_info=True,
                )
                return None
            for attribute in parts[split:]:
                target = getattr(target, attribute, None)
                if target is None:
                    return None
            return target
        return None


__all__ = ["ParameterInfo", "TypeIntrospector", "type_identifier"]
