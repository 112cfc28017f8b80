from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from contextlib import AbstractContextManager, nullcontext
from inspect import Parameter
from typing import Any, TypeVar, overload

from diatoms._internal.errors import UnresolvableDependencyError
from diatoms._internal.introspection import ParameterInfo, TypeIntrospector
from diatoms._internal.type_checks import is_runtime_class
from diatoms.bindings import Binding, ClassName, Descriptor, Factory
from diatoms.exceptions import ContainerError, InvalidBindingError, NotFoundError
from diatoms.lock_mode import LockMode

T = TypeVar("T")

Overrides = Mapping[Any, Any]
"""Explicit constructor arguments keyed by parameter name or position."""

logger = logging.getLogger(__name__)


class Container:
    """Register bindings and resolve object graphs by constructor introspection.

    Abstract identifiers are non-empty strings. Classes are accepted anywhere an
    identifier is expected and stand for their dotted qualified name, so
    ``container.make(Service)`` and ``container.make("app.services.Service")``
    address the same entry. A different class that reuses an already known
    qualified name is given its own identifier (the name suffixed with
    ``@<id>``), so the two never share a binding or a cached instance.

    Unbound identifiers are resolved as class names: the class is located,
    its ``__init__`` (or ``__new__``) parameters are introspected, and each
    parameter is filled from an explicit override, from the container (for
    class-typed parameters), or from its default value.

    Dependency cycles are not detected. A cyclic graph recurses until Python
    raises ``RecursionError``.
    """

    def __init__(
        self,
        introspector: TypeIntrospector | None = None,
        *,
        lock_mode: LockMode = LockMode.THREAD,
    ) -> None:
        """Initialize an empty container.

        Args:
            introspector: Capability used to locate classes and list constructor
                parameters. Defaults to a fresh ``TypeIntrospector``.
            lock_mode: ``LockMode.THREAD`` guards bindings and the instance
                cache with one re-entrant lock held for each whole resolution.
                ``LockMode.NONE`` disables locking.

        Examples:
            .. code-block:: python

                container = Container()

                single_threaded = Container(lock_mode=LockMode.NONE)

        """
        self._introspector = introspector if introspector is not None else TypeIntrospector()
        self._lock_mode = lock_mode
        self._lock: AbstractContextManager[Any] = (
            threading.RLock() if lock_mode is LockMode.THREAD else nullcontext()
        )
        self._bindings: dict[str, Binding] = {}
        self._instances: dict[str, Any] = {}

    # region Registration Methods
    def bind(
        self,
        abstract: str | type[Any],
        concrete: str | type[Any] | Any = None,
        shared: bool = False,  # noqa: FBT001, FBT002
    ) -> None:
        """Register how an abstract identifier is constructed.

        Rebinding an identifier replaces its previous binding. A cached
        instance for the identifier, if any, still takes precedence.

        Args:
            abstract: Identifier to register, as a name or a class.
            concrete: Class name, class, or factory called as
                ``factory(container, overrides)``. Defaults to ``abstract``
                itself. A name different from ``abstract`` is resolved through
                ``make`` so that its own bindings and sharing apply.
            shared: Cache the first resolved instance and return it for every
                later resolution of ``abstract``.

        Raises:
            InvalidBindingError: If ``abstract`` is not a non-empty string or a
                class, or ``concrete`` is not a name, class or callable.

        Examples:
            .. code-block:: python

                container.bind(Repository, SqlRepository)
                container.bind("clock", lambda container, overrides: SystemClock())

        """
        key = self._key(abstract)
        descriptor = self._descriptor(key, concrete)
        with self._lock:
            self._bindings[key] = Binding(concrete=descriptor, shared=shared)
        logger.debug("Bound %s to %r (shared=%s)", key, descriptor, shared)

    def share(self, abstract: str | type[Any], concrete: str | type[Any] | Any = None) -> None:
        """Register a shared binding; see ``bind``.

        Args:
            abstract: Identifier to register.
            concrete: Class name, class, or factory. Defaults to ``abstract``.

        """
        self.bind(abstract, concrete, shared=True)

    def instance(self, abstract: str | type[Any], value: Any) -> None:
        """Register a pre-built value returned for every resolution of ``abstract``.

        The value is stored in the instance cache, so it wins over any binding
        registered for the same identifier and no construction is attempted.
        ``None`` is a valid value.

        Args:
            abstract: Identifier to register.
            value: Object to return on resolution.

        Raises:
            InvalidBindingError: If ``abstract`` is not a non-empty string or a class.

        """
        key = self._key(abstract)
        with self._lock:
            self._instances[key] = value
        logger.debug("Registered instance for %s", key)

    # endregion Registration Methods

    # region Registry Queries
    def is_bound(self, abstract: str | type[Any]) -> bool:
        """Return true when a binding or a cached instance exists for ``abstract``."""
        key = self._key(abstract)
        with self._lock:
            return key in self._bindings or key in self._instances

    def is_shared(self, abstract: str | type[Any]) -> bool:
        """Return true when ``abstract`` has a cached instance or a shared binding."""
        key = self._key(abstract)
        with self._lock:
            if key in self._instances:
                return True
            binding = self._bindings.get(key)
            return binding is not None and binding.shared

    def get_concrete(self, abstract: str | type[Any]) -> Descriptor:
        """Return the descriptor registered for ``abstract``.

        Unbound identifiers are reported as ``ClassName(abstract)``: the
        container will try to construct a class of that name.
        """
        key = self._key(abstract)
        with self._lock:
            binding = self._bindings.get(key)
        if binding is None:
            return ClassName(key)
        return binding.concrete

    def has(self, id: object) -> bool:  # noqa: A002
        """Return true when ``id`` can be resolved by the container.

        An identifier is resolvable when it is bound, has a cached instance, or
        names a locatable, instantiable class. Input that is neither a
        non-empty string nor a class yields ``False``, and so does an
        identifier whose module cannot be imported or fails while importing.

        Args:
            id: Identifier to check.

        Returns:
            Whether ``get(id)`` has a chance to succeed.

        """
        if not (isinstance(id, str) and id) and not is_runtime_class(id):
            return False
        if self.is_bound(id):
            return True

        cls = self._introspector.locate(self._key(id))
        return cls is not None and self._introspector.is_instantiable(cls)

    # endregion Registry Queries

    # region Resolution Methods
    @overload
    def get(self, id: type[T], overrides: Overrides | None = None) -> T: ...  # noqa: A002

    @overload
    def get(self, id: str, overrides: Overrides | None = None) -> Any: ...  # noqa: A002

    def get(self, id: str | type[Any], overrides: Overrides | None = None) -> Any:  # noqa: A002
        """Resolve ``id``; the lookup entry point, equivalent to ``make``.

        Raises:
            NotFoundError: If the concrete class behind ``id`` cannot be located.
            ContainerError: If it cannot be instantiated or a dependency cannot
                be resolved.

        """
        return self.make(id, overrides)

    @overload
    def make(self, abstract: type[T], overrides: Overrides | None = None) -> T: ...

    @overload
    def make(self, abstract: str, overrides: Overrides | None = None) -> Any: ...

    def make(self, abstract: str | type[Any], overrides: Overrides | None = None) -> Any:
        """Resolve an abstract identifier into an instance.

        A cached instance is returned as-is. Otherwise the registered
        descriptor is built, following indirection bindings (``bind(A, B)``)
        through ``make`` so the target's own bindings apply. The result is
        cached when ``abstract`` itself is shared.

        Args:
            abstract: Identifier to resolve, as a name or a class.
            overrides: Explicit arguments for the constructor of the resolved
                class, keyed by parameter name or by position. They are used
                verbatim and are not passed on to nested dependencies.

        Returns:
            The resolved instance.

        Raises:
            NotFoundError: If a concrete class cannot be located or introspected.
            ContainerError: If a class is not instantiable or a dependency has
                neither a resolvable type nor a default.

        Examples:
            .. code-block:: python

                container.bind(Logger)
                service = container.make(Service, {"name": "billing"})

        """
        key = self._key(abstract)
        resolution_overrides: Overrides = {} if overrides is None else overrides

        with self._lock:
            if key in self._instances:
                return self._instances[key]

            concrete = self.get_concrete(key)
            if self._is_buildable(concrete, key):
                resolved = self.build(concrete, resolution_overrides)
            else:
                resolved = self.make(concrete.name, resolution_overrides)

            if self.is_shared(key):
                logger.debug("Caching shared instance for %s", key)
                self._instances[key] = resolved

            return resolved

    def build(
        self,
        concrete: Descriptor | str | type[Any],
        overrides: Overrides | None = None,
    ) -> Any:
        """Construct ``concrete`` directly, without consulting bindings for it.

        Factories are called with ``(container, overrides)`` and fully control
        construction. Classes are instantiated after resolving every
        ``__init__`` parameter; ``*args`` and ``**kwargs`` are left empty.

        Args:
            concrete: Descriptor, class name, or class to construct.
            overrides: Explicit constructor arguments by name or position.

        Returns:
            The new instance.

        Raises:
            NotFoundError: If the class cannot be located or introspected.
            ContainerError: If the class is not instantiable or a parameter
                cannot be resolved.
            InvalidBindingError: If a positional override has no matching
                parameter.

        """
        if not isinstance(concrete, (ClassName, Factory)):
            concrete = ClassName(self._key(concrete))
        resolution_overrides: Overrides = {} if overrides is None else overrides

        if isinstance(concrete, Factory):
            return concrete(self, resolution_overrides)

        name = concrete.name
        cls = self._introspector.locate(name)
        if cls is None:
            msg = f"The class {name} could not be found"
            raise NotFoundError(msg, abstract=name)

        if not self._introspector.is_instantiable(cls):
            msg = f"The class {name} is not instantiable"
            raise ContainerError(msg, abstract=name)

        parameters = self._introspector.get_constructor_parameters(cls)
        logger.debug("Building %s with %d constructor parameter(s)", name, len(parameters))
        if not parameters:
            return cls()

        keyed_overrides = self._key_overrides_by_parameter(name, parameters, resolution_overrides)
        try:
            arguments = self._resolve_dependencies(parameters, keyed_overrides)
        except UnresolvableDependencyError as error:
            raise ContainerError(str(error), abstract=name) from error

        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for parameter, argument in zip(parameters, arguments, strict=True):
            if parameter.kind is Parameter.KEYWORD_ONLY:
                kwargs[parameter.name] = argument
            else:
                args.append(argument)
        return cls(*args, **kwargs)

    # endregion Resolution Methods

    def _resolve_dependencies(
        self,
        parameters: tuple[ParameterInfo, ...],
        overrides: Mapping[str, Any],
    ) -> list[Any]:
        """Resolve constructor arguments in parameter declaration order."""
        dependencies: list[Any] = []
        for parameter in parameters:
            if parameter.name in overrides:
                dependencies.append(overrides[parameter.name])
            elif parameter.declared_type is not None:
                dependencies.append(self._resolve_class_param(parameter, parameter.declared_type))
            else:
                dependencies.append(self._resolve_primitive_param(parameter))
        return dependencies

    def _resolve_class_param(self, parameter: ParameterInfo, declared_type: str) -> Any:
        try:
            return self.make(declared_type)
        except ContainerError:
            if parameter.has_default:
                logger.debug(
                    "Falling back to default for %s.%s: %s is not resolvable",
                    parameter.owner,
                    parameter.name,
                    declared_type,
                )
                return parameter.default
            raise

    def _resolve_primitive_param(self, parameter: ParameterInfo) -> Any:
        if parameter.has_default:
            return parameter.default
        raise UnresolvableDependencyError(parameter.name, parameter.owner)

    def _key_overrides_by_parameter(
        self,
        name: str,
        parameters: tuple[ParameterInfo, ...],
        overrides: Overrides,
    ) -> dict[str, Any]:
        """Re-key positional (integer) overrides by the parameter name at that position."""
        keyed: dict[str, Any] = {}
        for key, value in overrides.items():
            if isinstance(key, int) and not isinstance(key, bool):
                if not 0 <= key < len(parameters):
                    msg = f"Positional override {key} does not match a parameter of {name}"
                    raise InvalidBindingError(msg, abstract=name)
                keyed[parameters[key].name] = value
            else:
                keyed[key] = value
        return keyed

    def _is_buildable(self, concrete: Descriptor, abstract: str) -> bool:
        return isinstance(concrete, Factory) or concrete.name == abstract

    def _descriptor(self, key: str, concrete: object) -> Descriptor:
        if concrete is None:
            return ClassName(key)
        if isinstance(concrete, (ClassName, Factory)):
            return concrete
        if isinstance(concrete, (str, type)):
            return ClassName(self._key(concrete))
        if callable(concrete):
            return Factory(concrete)
        msg = f"Concrete for {key} must be a class name, a class or a callable, got {concrete!r}."
        raise InvalidBindingError(msg, abstract=key)

    def _key(self, abstract: object) -> str:
        if isinstance(abstract, str) and abstract:
            return abstract
        if is_runtime_class(abstract):
            return self._introspector.register(abstract)
        msg = f"Abstract identifier must be a non-empty string or a class, got {abstract!r}."
        raise InvalidBindingError(msg)


__all__ = ["Container", "Overrides"]
