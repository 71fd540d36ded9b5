"""
Backlink Model System — two-way associations over one-way content links.

Usage:
    from backlink.models import Model, has_many, belongs_to, belongs_to_many

    class Category(Model):
        posts = has_many("posts")

    class Post(Model):
        category = belongs_to("category")
        tags = belongs_to_many("tags")

Public API:
    - Model: Base class for all models
    - Associations: HasMany, HasOne, BelongsTo, BelongsToMany and the
      has_many / has_one / belongs_to / belongs_to_many declarations
    - ModelRegistry: Global model registry
    - Record sources: RecordSource, Query, MemorySource
"""

from .associations import (
    Association,
    BoundAssociation,
    Capability,
    HasMany,
    HasOne,
    BelongsTo,
    BelongsToMany,
    has_many,
    has_one,
    belongs_to,
    belongs_to_many,
)
from .base import Model
from .metaclass import ModelMeta
from .options import Options
from .registry import ModelRegistry
from .source import MemorySource, Query, RecordSource

__all__ = [
    # Core
    "Model",
    "ModelMeta",
    "Options",
    "ModelRegistry",
    # Associations
    "Association",
    "BoundAssociation",
    "Capability",
    "HasMany",
    "HasOne",
    "BelongsTo",
    "BelongsToMany",
    "has_many",
    "has_one",
    "belongs_to",
    "belongs_to_many",
    # Sources
    "RecordSource",
    "Query",
    "MemorySource",
]
