"""Overrides: supply constructor arguments for one resolution.

Overrides are keyed by parameter name or position. They replace normal
resolution for the requested class only; nested dependencies are resolved
as usual.
"""

from __future__ import annotations

from diatoms import Container


class Mailer:
    def __init__(self, sender: str = "noreply@example.com") -> None:
        self.sender = sender


class Newsletter:
    def __init__(self, mailer: Mailer, subject: str = "Weekly") -> None:
        self.mailer = mailer
        self.subject = subject


def main() -> None:
    container = Container()

    newsletter = container.make(Newsletter, {"subject": "Launch"})
    print(f"subject={newsletter.subject}")  # => subject=Launch
    print(f"sender={newsletter.mailer.sender}")  # => sender=noreply@example.com

    custom_mailer = Mailer(sender="news@example.com")
    newsletter = container.make(Newsletter, {0: custom_mailer})
    print(f"positional={newsletter.mailer.sender}")  # => positional=news@example.com


if __name__ == "__main__":
    main()
