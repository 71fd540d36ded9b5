"""
Backlink Record Sources — the boundary to the content API.

Associations only ever ask a source for every record of a model type:

    Post.all().load()   # → source.all(Post).load()

Anything that implements ``RecordSource`` can be installed with
``ModelRegistry.set_source``. ``MemorySource`` keeps records in memory,
which is enough for tests, fixtures and pre-fetched content.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Protocol, Type, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from .base import Model

logger = logging.getLogger("backlink.models.source")

__all__ = ["RecordSource", "Query", "MemorySource"]


class Query:
    """A pending fetch of every record of one model type."""

    def __init__(self, model_cls: Type[Model], fetch):
        self.model_cls = model_cls
        self._fetch = fetch

    def load(self) -> List[Model]:
        """Materialize the records."""
        return list(self._fetch())

    def __iter__(self):
        return iter(self.load())

    def __repr__(self) -> str:
        return f"<Query {self.model_cls.__name__}.all()>"


@runtime_checkable
class RecordSource(Protocol):
    """Anything that can list every record of a model type."""

    def all(self, model_cls: Type[Model]) -> Query: ...


class MemorySource:
    """
    In-memory record source.

    Records are bucketed by the model's ``Meta.content_type``.
    ``query_count`` counts the queries that were actually loaded.
    """

    def __init__(self, records: Iterable[Model] = ()):
        self._records: Dict[str, List[Model]] = {}
        self.query_count = 0
        self.extend(records)

    def add(self, record: Model) -> Model:
        self._records.setdefault(record._meta.content_type, []).append(record)
        return record

    def extend(self, records: Iterable[Model]) -> None:
        for record in records:
            self.add(record)

    def all(self, model_cls: Type[Model]) -> Query:
        content_type = model_cls._meta.content_type

        def fetch() -> List[Model]:
            self.query_count += 1
            records = self._records.get(content_type, [])
            logger.debug("Loaded %d %s records", len(records), content_type)
            return list(records)

        return Query(model_cls, fetch)

    def __len__(self) -> int:
        return sum(len(records) for records in self._records.values())

    def __repr__(self) -> str:
        return f"<MemorySource {len(self)} records>"
