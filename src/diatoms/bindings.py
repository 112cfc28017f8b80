from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias, Union

if TYPE_CHECKING:
    from diatoms.container import Container

FactoryFunction: TypeAlias = Callable[..., Any]
"""Callable invoked as ``fn(container, overrides)`` to produce an instance."""


@dataclass(frozen=True, slots=True)
class ClassName:
    """Descriptor naming a class the container constructs by introspection."""

    name: str


@dataclass(frozen=True, slots=True)
class Factory:
    """Descriptor wrapping a user factory that fully controls construction."""

    fn: FactoryFunction

    def __call__(self, container: Container, overrides: Mapping[Any, Any]) -> Any:
        return self.fn(container, overrides)


Descriptor: TypeAlias = Union[ClassName, Factory]  # noqa: UP007
"""A concrete construction strategy registered for an abstract identifier."""


@dataclass(frozen=True, slots=True)
class Binding:
    """Registered ``abstract -> concrete`` entry.

    A binding is created by ``bind``/``share`` and replaced when the same
    abstract identifier is bound again.
    """

    concrete: Descriptor
    shared: bool = False


__all__ = ["Binding", "ClassName", "Descriptor", "Factory", "FactoryFunction"]
