"""Quickstart: automatic dependency wiring from constructor type hints.

Start with plain classes, resolve only the top-level service, and see how
diatoms builds the full dependency chain for you.
"""

from __future__ import annotations

from diatoms import Container


class Logger:
    def __init__(self) -> None:
        self.prefix = "[app]"


class Service:
    def __init__(self, logger: Logger, name: str = "default") -> None:
        self.logger = logger
        self.name = name


class Controller:
    def __init__(self, service: Service) -> None:
        self.service = service


def main() -> None:
    container = Container()
    container.bind(Logger)

    controller = container.make(Controller)

    print(f"name={controller.service.name}")  # => name=default
    print(f"prefix={controller.service.logger.prefix}")  # => prefix=[app]

    chain = (
        f"{type(controller).__name__}"
        f">{type(controller.service).__name__}"
        f">{type(controller.service.logger).__name__}"
    )
    print(f"chain={chain}")  # => chain=Controller>Service>Logger


if __name__ == "__main__":
    main()
