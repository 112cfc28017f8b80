from __future__ import annotations

import types
from typing import Annotated, Any, TypeGuard, Union, get_args, get_origin


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def unwrap_annotation(annotation: Any) -> Any:
    """Strip ``Annotated`` metadata and a single ``None`` member from unions.

    ``Optional[Db]``, ``Db | None`` and ``Annotated[Db, ...]`` all unwrap to ``Db``.
    Unions with more than one non-``None`` member are returned unchanged.

    Args:
        annotation: Evaluated type hint of a constructor parameter.

    """
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]

    if get_origin(annotation) in (Union, types.UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return unwrap_annotation(members[0])

    return annotation


__all__ = ["is_runtime_class", "unwrap_annotation"]
