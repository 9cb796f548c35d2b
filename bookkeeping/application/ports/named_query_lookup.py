"""Port for stored named-query templates."""

from typing import Protocol

from bookkeeping.domain.models.named_query import NamedQuery


class NamedQueryLookupPort(Protocol):
    def get(self, name: str) -> NamedQuery:
        """Return the template stored under ``name``.

        Raises:
            KeyError: When no template has that name.
        """


__all__ = ["NamedQueryLookupPort"]
