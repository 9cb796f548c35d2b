"""In-memory chart of accounts used to name titles in reports."""

from collections.abc import Mapping

from bookkeeping.application.ports.title_lookup import TitleLookupPort


class ChartOfAccounts(TitleLookupPort):
    """Read-only title and sub-title names.

    Attributes:
        titles: Title names keyed by four-digit title.
        subtitles: Sub-title names keyed by ``(title, subtitle)``.
    """

    def __init__(
        self,
        titles: Mapping[int, str] | None = None,
        subtitles: Mapping[tuple[int, int], str] | None = None,
    ) -> None:
        self.titles = dict(titles or {})
        self.subtitles = dict(subtitles or {})

    def name(self, title: int, subtitle: int | None = None) -> str | None:
        if subtitle is None:
            return self.titles.get(title)
        return self.subtitles.get((title, subtitle))


__all__ = ["ChartOfAccounts"]
