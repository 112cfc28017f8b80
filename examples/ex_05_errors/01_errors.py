"""Errors: what diatoms raises when a graph cannot be built.

``NotFoundError`` means a class could not be located. ``ContainerError``
means a class was found but could not be constructed, either because it is
abstract or because a parameter has no value to use.
"""

from __future__ import annotations

import abc

from diatoms import Container, ContainerError, NotFoundError


class Storage(abc.ABC):
    @abc.abstractmethod
    def save(self) -> None: ...


class Uploader:
    def __init__(self, bucket: str) -> None:
        self.bucket = bucket


class Archiver:
    def __init__(self, storage: Storage | None = None) -> None:
        self.storage = storage


def main() -> None:
    container = Container()

    try:
        container.get("app.missing.Service")
    except NotFoundError as error:
        print(f"not_found={error}")  # => not_found=The class app.missing.Service could not be found

    try:
        container.get(Storage)
    except ContainerError as error:
        print(f"abstract={error}")  # => abstract=The class __main__.Storage is not instantiable

    try:
        container.get(Uploader)
    except ContainerError as error:
        print(f"unresolvable={error}")  # => unresolvable=Unresolvable dependency resolving parameter 'bucket' in class __main__.Uploader

    print(f"optional={container.get(Archiver).storage}")  # => optional=None
    print(f"has_missing={container.has('app.missing.Service')}")  # => has_missing=False


if __name__ == "__main__":
    main()
