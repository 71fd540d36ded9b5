"""
Backlink Model Registry — global registry for all Model subclasses.

Indexes models by class name and by their singular/plural association
keys, holds the active record source and runtime settings, and answers
capability queries against each model's declared association table.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Type, TYPE_CHECKING

from ..config import BacklinkConfig
from .associations import BelongsToMany, Capability, HasMany, HasOne

if TYPE_CHECKING:
    from .base import Model
    from .source import RecordSource

logger = logging.getLogger("backlink.models.registry")

__all__ = ["ModelRegistry"]


class ModelRegistry:
    """
    Global registry for all Model subclasses.

    Keys are looked up exactly as registered: ``Post`` is reachable as
    "Post" by name and as "post" / "posts" by association key.
    """

    _models: Dict[str, Type[Model]] = {}
    _keys: Dict[str, Type[Model]] = {}  # singular/plural key → cls
    _source: Optional[RecordSource] = None
    settings: BacklinkConfig = BacklinkConfig()

    @classmethod
    def register(cls, model_cls: Type[Model]) -> None:
        """Register a model class."""
        name = model_cls.__name__
        cls._models[name] = model_cls

        for key in model_cls._meta.keys:
            previous = cls._keys.get(key)
            if previous is not None and previous is not model_cls:
                logger.warning(
                    "Association key '%s' moved from %s to %s",
                    key, previous.__name__, name,
                )
            cls._keys[key] = model_cls

        if cls._source is not None:
            model_cls._source = cls._source

        logger.debug(
            "Registered model %s (%s) with associations %s",
            name, "/".join(model_cls._meta.keys), sorted(model_cls._associations),
        )

    @classmethod
    def get(cls, name: str) -> Optional[Type[Model]]:
        """Get model class by name."""
        return cls._models.get(name)

    @classmethod
    def get_by_key(cls, key: str) -> Optional[Type[Model]]:
        """Get model class by singular or plural association key."""
        return cls._keys.get(key)

    @classmethod
    def all_models(cls) -> Dict[str, Type[Model]]:
        """Get all registered models."""
        return dict(cls._models)

    @classmethod
    def capabilities(cls, model_cls: Type[Model], key: str) -> Capability:
        """What ``model_cls`` declares under ``key``."""
        association = getattr(model_cls, "_associations", {}).get(key)
        return association.capabilities if association is not None else Capability.NONE

    @classmethod
    def set_source(cls, source: Optional[RecordSource]) -> None:
        """Set global record source for all models."""
        cls._source = source
        for model_cls in cls._models.values():
            model_cls._source = source
        logger.info("Record source set to %r", source)

    @classmethod
    def get_source(cls) -> Optional[RecordSource]:
        return cls._source

    @classmethod
    def configure(cls, config: BacklinkConfig) -> None:
        cls.settings = config

    @classmethod
    def reset(cls) -> None:
        """Clear registry (for testing)."""
        cls._models.clear()
        cls._keys.clear()
        cls._source = None
        cls.settings = BacklinkConfig()

    @classmethod
    def check_relations(cls) -> List[str]:
        """
        Validate all declared associations and return a list of issues.

        Checks:
        - has_many / has_one / belongs_to_many targets are registered
        - has_many targets can carry the back-reference to their parent
        """
        issues: List[str] = []

        for name, model_cls in cls._models.items():
            singular = model_cls._meta.singular_name
            for key, association in model_cls._associations.items():
                if not isinstance(association, (HasMany, HasOne, BelongsToMany)):
                    continue
                target = cls._keys.get(key)
                if target is None:
                    issues.append(
                        f"{name}.{key}: {association.kind} target '{key}' not registered"
                    )
                    continue
                if isinstance(association, HasMany) and not (
                    cls.capabilities(target, singular) & Capability.WRITE_BACKREF
                ):
                    issues.append(
                        f"{name}.{key}: {target.__name__} has no belongs_to '{singular}'"
                    )

        return issues
