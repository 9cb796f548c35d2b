"""Port for chart-of-accounts names, used by presenters only."""

from typing import Protocol


class TitleLookupPort(Protocol):
    def name(self, title: int, subtitle: int | None = None) -> str | None:
        """Return the display name of a title or sub-title."""


__all__ = ["TitleLookupPort"]
