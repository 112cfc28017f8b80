"""Bindings: map abstract identifiers to classes, names, and factories.

Bind an abstract base class to an implementation, chain bindings through
string identifiers, and hand construction over to a factory when a class
needs values the container cannot infer.
"""

from __future__ import annotations

import abc
from collections.abc import Mapping
from typing import Any

from diatoms import Container


class Cache(abc.ABC):
    @abc.abstractmethod
    def backend(self) -> str: ...


class MemoryCache(Cache):
    def backend(self) -> str:
        return "memory"


class RedisCache(Cache):
    def __init__(self, url: str) -> None:
        self.url = url

    def backend(self) -> str:
        return f"redis@{self.url}"


class Repository:
    def __init__(self, cache: Cache) -> None:
        self.cache = cache


def redis_factory(container: Container, overrides: Mapping[Any, Any]) -> RedisCache:
    return RedisCache(url=overrides.get("url", "localhost:6379"))


def main() -> None:
    container = Container()

    container.bind(Cache, MemoryCache)
    print(f"repository_cache={container.make(Repository).cache.backend()}")  # => repository_cache=memory

    container.bind("cache.default", "cache.redis")
    container.bind("cache.redis", redis_factory)
    print(f"default={container.make('cache.default').backend()}")  # => default=redis@localhost:6379

    custom = container.make("cache.redis", {"url": "cache:6380"})
    print(f"custom={custom.backend()}")  # => custom=redis@cache:6380


if __name__ == "__main__":
    main()
