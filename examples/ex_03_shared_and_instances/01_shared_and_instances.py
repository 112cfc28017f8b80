"""Shared bindings and instances: control how often objects are built.

Unshared bindings build a new object on every ``make``. Shared bindings
cache the first object, and ``instance`` registers an object you built
yourself.
"""

from __future__ import annotations

from diatoms import Container


class Connection:
    pass


class Clock:
    def __init__(self, now: str) -> None:
        self.now = now


def main() -> None:
    container = Container()

    container.bind(Connection)
    first, second = container.make(Connection), container.make(Connection)
    print(f"bind_same={first is second}")  # => bind_same=False

    container.share(Connection)
    first, second = container.make(Connection), container.make(Connection)
    print(f"share_same={first is second}")  # => share_same=True

    clock = Clock(now="2024-01-01T00:00:00")
    container.instance(Clock, clock)
    print(f"instance_same={container.make(Clock) is clock}")  # => instance_same=True
    print(f"is_shared={container.is_shared(Clock)}")  # => is_shared=True


if __name__ == "__main__":
    main()
