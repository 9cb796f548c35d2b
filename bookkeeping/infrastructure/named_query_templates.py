"""In-memory store of named-query templates."""

from collections.abc import Iterable

from bookkeeping.application.ports.named_query_lookup import NamedQueryLookupPort
from bookkeeping.domain.models.named_query import NamedQuery


class InMemoryNamedQueryLookup(NamedQueryLookupPort):
    """Templates keyed by their own name."""

    def __init__(self, templates: Iterable[NamedQuery] = ()) -> None:
        self._templates = {template.name: template for template in templates}

    def register(self, template: NamedQuery) -> None:
        self._templates[template.name] = template

    def get(self, name: str) -> NamedQuery:
        try:
            return self._templates[name]
        except KeyError:
            raise KeyError(f"Unknown named query: {name}") from None


__all__ = ["InMemoryNamedQueryLookup"]
