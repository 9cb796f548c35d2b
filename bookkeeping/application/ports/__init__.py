"""Application ports package."""

from .database import DatabaseEnginePort
from .named_query_lookup import NamedQueryLookupPort
from .rate_lookup import RateLookupPort
from .record_source import RecordSourcePort
from .title_lookup import TitleLookupPort

__all__ = [
    "DatabaseEnginePort",
    "NamedQueryLookupPort",
    "RateLookupPort",
    "RecordSourcePort",
    "TitleLookupPort",
]
