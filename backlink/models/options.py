"""
Backlink Model Options — parsed from inner Meta class.

Contains the Options class which stores model metadata like the
singular/plural association keys and the declared association list.
"""

from __future__ import annotations

import re
from typing import Any, List, Optional


__all__ = ["Options", "underscore"]


_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def underscore(name: str) -> str:
    """``BlogPost`` → ``blog_post``."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


class Options:
    """
    Parsed model options from inner Meta class.

    Attributes:
        singular_name: Key other models use for a single instance ("category")
        plural_name: Key other models use for a collection ("categories")
        content_type: Record source bucket for this model
        associations: Associations declared as a list on Meta
        abstract: Whether model is abstract (not registered)
    """

    __slots__ = (
        "singular_name",
        "plural_name",
        "content_type",
        "associations",
        "abstract",
    )

    def __init__(self, model_name: str, meta: Optional[type] = None):
        default_singular = underscore(model_name)
        self.singular_name: str = (
            getattr(meta, "singular_name", None) if meta else None
        ) or default_singular
        self.plural_name: str = (
            getattr(meta, "plural_name", None) if meta else None
        ) or f"{self.singular_name}s"
        self.content_type: str = (
            getattr(meta, "content_type", None) if meta else None
        ) or self.singular_name
        self.associations: List[Any] = list(getattr(meta, "associations", []) if meta else [])
        self.abstract: bool = getattr(meta, "abstract", False) if meta else False

    @property
    def keys(self) -> tuple:
        """Both registry keys: (singular, plural)."""
        return (self.singular_name, self.plural_name)

    def __repr__(self) -> str:
        return f"<Options: {self.singular_name}/{self.plural_name}>"
