"""Warning accumulator shared by every step of one pipeline run."""

from __future__ import annotations


class Warn:
    """Collects warning lines.

    A fresh instance is created by each ``normalize`` call and passed to every
    step of the chain. Calling it with a message records each non-empty line
    of that message once; repeated lines are ignored.

    Example::

        warn = Warn()
        warn("Leading or trailing whitespace is removed.")
        warn(None)  # ignored
        warn.message  # "Leading or trailing whitespace is removed."
    """

    __slots__ = ("_lines",)

    def __init__(self) -> None:
        self._lines: list[str] = []

    def __call__(self, message: str | None) -> None:
        if not message:
            return
        for line in message.split("\n"):
            if line and line not in self._lines:
                self._lines.append(line)

    @property
    def message(self) -> str | None:
        """Accumulated warning lines joined by newlines, or None."""
        return "\n".join(self._lines) or None

    def __repr__(self) -> str:
        return f"Warn({self.message!r})"
