"""
Backlink Model Metaclass — association collection, Meta parsing, registration.

Separates the metaclass logic from the Model base class for cleaner architecture.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from ..faults import ConfigurationError
from .associations import Association
from .options import Options

__all__ = ["ModelMeta"]


class ModelMeta(type):
    """
    Metaclass for backlink models.

    Handles:
    - Meta class parsing → Options
    - Association collection (class body and Meta.associations)
    - Inherited association tables
    - Model registration in ModelRegistry
    """

    def __new__(
        mcs,
        name: str,
        bases: Tuple[type, ...],
        namespace: Dict[str, Any],
        **kwargs,
    ) -> ModelMeta:
        # Don't process the base Model class itself
        parents = [b for b in bases if isinstance(b, ModelMeta)]
        if not parents:
            return super().__new__(mcs, name, bases, namespace)

        meta_class = namespace.pop("Meta", None)
        opts = Options(name, meta_class)

        # Inherit associations from parents
        associations: Dict[str, Association] = {}
        for parent in bases:
            if hasattr(parent, "_associations"):
                associations.update(parent._associations)

        # Class body first, then Meta.associations
        declared: List[Association] = [
            value for value in namespace.values() if isinstance(value, Association)
        ]
        for value in opts.associations:
            if not isinstance(value, Association):
                raise ConfigurationError(name, value, "Meta.associations entries must be declarations")
            declared.append(value)

        cls = super().__new__(mcs, name, bases, namespace)

        new_associations: Dict[str, Association] = {}
        for association in declared:
            association.bind(cls)
            if association.name in new_associations:
                raise ConfigurationError(name, association.name, "declared twice")
            new_associations[association.name] = association
            setattr(cls, association.name, association)
        associations.update(new_associations)

        cls._associations = associations
        cls._meta = opts
        cls._source = None

        if not opts.abstract:
            from .registry import ModelRegistry
            ModelRegistry.register(cls)

        return cls
