from __future__ import annotations


class ContainerError(Exception):
    """Represent a general failure to resolve a dependency.

    Raised when a class is found but cannot be instantiated (abstract classes,
    protocols, enums), or when a constructor parameter cannot be satisfied and
    declares no default value.

    Catch this type when you want to handle any diatoms error path;
    ``NotFoundError`` and ``InvalidBindingError`` are subclasses.
    """

    def __init__(self, msg: str, *, abstract: str | None = None) -> None:
        super().__init__(msg)
        self.abstract = abstract


class NotFoundError(ContainerError):
    """Signal that the concrete class for an identifier cannot be located.

    Raised by ``Container.get``/``Container.make`` when the identifier is not
    bound and does not name an importable or previously seen class, or when the
    class constructor cannot be introspected (for example an unresolvable
    forward reference in its annotations).

    Typical fixes include binding the identifier explicitly or passing the
    class object instead of its name.
    """


class InvalidBindingError(ContainerError):
    """Signal malformed registration or override arguments.

    Raised by ``Container.bind``, ``Container.share`` and ``Container.instance``
    when the abstract identifier is not a non-empty string or a class, or the
    concrete is neither a name, a class nor a callable. Also raised by
    ``Container.build`` for a positional override that has no matching
    constructor parameter.
    """
