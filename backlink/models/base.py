"""
Backlink Model Base — records from a one-way content source.

Usage:
    from backlink.models import Model, has_many, belongs_to

    class Category(Model):
        posts = has_many("posts")

    class Post(Model):
        category = belongs_to("category")

        class Meta:
            content_type = "blogPost"

    post = Post(id="p1", title="Hello")
    category = Category(id="c1", title="News", posts=[post])

    category.posts()   # [post]
    post.category()    # category
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Optional, TYPE_CHECKING

from ..faults import SourceNotConfiguredFault
from .associations import Association, Capability, capabilities_of
from .metaclass import ModelMeta
from .options import Options

if TYPE_CHECKING:
    from .source import Query, RecordSource

__all__ = ["Model"]


class Model(metaclass=ModelMeta):
    """
    Base class for all backlink models.

    An instance carries the source's identifier, its attribute data
    (link fields hold the already-materialized related records), one
    back-reference slot per declared ``belongs_to`` and a cache for
    ``belongs_to_many`` lookups.
    """

    _associations: ClassVar[Dict[str, Association]] = {}
    _meta: ClassVar[Options]
    _source: ClassVar[Optional[RecordSource]] = None

    def __init__(self, id: Any = None, **data: Any):
        self.id = id
        self._data: Dict[str, Any] = data
        self._backrefs: Dict[str, Any] = {
            name: None
            for name, association in self._associations.items()
            if association.capabilities & Capability.WRITE_BACKREF
        }
        self._relation_cache: Dict[str, List[Any]] = {}

    def __getattr__(self, name: str) -> Any:
        # Only called when normal lookup fails: fall back to attribute data
        if name.startswith("_"):
            raise AttributeError(name)
        data = self.__dict__.get("_data", {})
        if name in data:
            return data[name]
        raise AttributeError(
            f"'{type(self).__name__}' object has no attribute '{name}'"
        )

    # ── Primitive accessor ───────────────────────────────────────────

    def raw(self, name: str) -> Any:
        """
        Link field ``name`` exactly as the source delivered it.

        Associations wrap this; override it to fetch linked records
        some other way.
        """
        return self._data.get(name)

    @property
    def fields(self) -> Dict[str, Any]:
        return dict(self._data)

    # ── Capabilities ─────────────────────────────────────────────────

    @classmethod
    def supports(cls, key: str, capability: Capability = Capability.NONE) -> bool:
        """Whether this model declares ``key`` (with ``capability``, if given)."""
        association = cls._associations.get(key)
        if association is None:
            return False
        return (association.capabilities & capability) == capability

    def capabilities(self, key: str) -> Capability:
        return capabilities_of(self, key)

    # ── Source queries ───────────────────────────────────────────────

    @classmethod
    def all(cls) -> Query:
        """Every record of this model, via the installed record source."""
        source = cls._source
        if source is None:
            from .registry import ModelRegistry
            source = ModelRegistry.get_source()
        if source is None:
            raise SourceNotConfiguredFault(cls.__name__)
        return source.all(cls)

    @classmethod
    def find(cls, id: Any) -> Optional[Model]:
        for record in cls.all().load():
            if record.id == id:
                return record
        return None

    # ── Identity ─────────────────────────────────────────────────────

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Model):
            return NotImplemented
        return type(self) is type(other) and self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"
