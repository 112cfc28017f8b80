from __future__ import annotations


class UnresolvableDependencyError(Exception):
    """Local signal for a primitive parameter with no default and no override.

    Only ``Container.build`` catches it, re-raising a ``ContainerError`` that
    names the parameter and its declaring class.
    """

    def __init__(self, parameter: str, owner: str | None = None) -> None:
        self.parameter = parameter
        self.owner = owner
        msg = f"Unresolvable dependency resolving parameter '{parameter}'"
        if owner is not None:
            msg = f"{msg} in class {owner}"
        super().__init__(msg)
