"""
Backlink Associations — two-way relationships over one-way links.

Content sources such as headless CMS APIs only store a link from a child
record to its parent. The association descriptors declared here let model
code walk those links in both directions:

    class Category(Model):
        posts = has_many("posts")

    class Post(Model):
        category = belongs_to("category")
        tags = belongs_to_many("tags")

    category.posts()          # children, each cross-linked to category
    post.category()           # back-reference set by category.posts()
    post.category = other     # explicit back-reference
    tag.posts()               # inverse search over Post.all(), memoized

Every descriptor is bound to exactly one model class by ModelMeta and is
listed in that class's ``_associations`` table, which is also what the
capability probe reads.
"""

from __future__ import annotations

import enum
import keyword
import logging
from typing import Any, ClassVar, Dict, List, Optional, Type, TYPE_CHECKING

from ..faults import (
    ConfigurationError,
    ModelNotFoundFault,
    UnsupportedRelationError,
)

if TYPE_CHECKING:
    from .base import Model

logger = logging.getLogger("backlink.models.associations")

__all__ = [
    "Capability",
    "Association",
    "BoundAssociation",
    "HasMany",
    "HasOne",
    "BelongsTo",
    "BelongsToMany",
    "has_many",
    "has_one",
    "belongs_to",
    "belongs_to_many",
    "capabilities_of",
]


class Capability(enum.Flag):
    """What an association lets callers do with a related instance."""

    NONE = 0
    READ_ONE = enum.auto()
    READ_MANY = enum.auto()
    WRITE_BACKREF = enum.auto()
    INVERSE = enum.auto()


def capabilities_of(obj: Any, key: str) -> Capability:
    """Capabilities declared under ``key`` by the model type of ``obj``."""
    table = getattr(type(obj), "_associations", None) or {}
    association = table.get(key)
    return association.capabilities if association is not None else Capability.NONE


def _link(child: Any, key: str, parent: Any) -> None:
    type(child)._associations[key].assign(child, parent)


# ── Base descriptor ──────────────────────────────────────────────────────────


class Association:
    """
    Base class for association descriptors.

    ``name`` is the relationship key: the accessor name on the owning
    class and the plural or singular key of the related model.
    ``options`` are kept verbatim for record-source collaborators.
    """

    kind: ClassVar[str] = "association"
    capabilities: ClassVar[Capability] = Capability.NONE

    def __init__(self, name: Optional[str] = None, **options: Any):
        self.name = name
        self.options: Dict[str, Any] = dict(options)
        self.model: Optional[Type[Model]] = None
        self._attr_name: Optional[str] = None
        if name is not None:
            self.validate_name(None)

    def __set_name__(self, owner: type, name: str) -> None:
        self._attr_name = name

    def bind(self, model_cls: Type[Model]) -> None:
        """Attach to the owning model class. Called once by ModelMeta."""
        owner = model_cls.__name__
        if self.model is not None:
            raise ConfigurationError(
                owner, self.name,
                f"already declared on '{self.model.__name__}'",
            )
        if self.name is None:
            self.name = self._attr_name
        if self.name is None:
            raise ConfigurationError(owner, None, "association needs a name")
        if self._attr_name is not None and self._attr_name != self.name:
            raise ConfigurationError(
                owner, self.name,
                f"assigned to attribute '{self._attr_name}'",
            )
        self.validate_name(owner)
        self._check_not_reserved(model_cls)
        self.model = model_cls

    def _check_not_reserved(self, model_cls: Type[Model]) -> None:
        # The accessor is installed on the class, so it must not replace
        # model API (all, find, raw...) or private and identity attributes
        owner = model_cls.__name__
        if self.name.startswith("_") or self.name == "id":
            raise ConfigurationError(owner, self.name, "name is reserved by Model")
        for klass in model_cls.__mro__:
            if self.name not in vars(klass):
                continue
            member = vars(klass)[self.name]
            if member is self or isinstance(member, Association):
                continue
            raise ConfigurationError(
                owner, self.name, f"would shadow '{klass.__name__}.{self.name}'",
            )

    def validate_name(self, owner: Optional[str]) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ConfigurationError(owner, self.name, "name must be a non-empty string")

    # ── Descriptor protocol ──────────────────────────────────────────

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self
        return BoundAssociation(self, instance)

    def __set__(self, instance: Any, value: Any) -> None:
        raise AttributeError(
            f"{self.kind} association '{self.name}' on "
            f"'{type(instance).__name__}' is read-only"
        )

    # ── Strategy hooks ───────────────────────────────────────────────

    def resolve(self, instance: Model) -> Any:
        raise NotImplementedError

    def assign(self, instance: Model, value: Any) -> None:
        self.__set__(instance, value)

    def peek(self, instance: Model) -> Any:
        """Related value as currently known, without cross-linking."""
        return instance.raw(self.name)

    def __repr__(self) -> str:
        owner = self.model.__name__ if self.model is not None else "?"
        return f"<{self.kind} {owner}.{self.name}>"


class BoundAssociation:
    """An association accessor bound to one instance: call it to resolve."""

    __slots__ = ("association", "instance")

    def __init__(self, association: Association, instance: Model):
        self.association = association
        self.instance = instance

    def __call__(self) -> Any:
        return self.association.resolve(self.instance)

    def set(self, value: Any) -> None:
        self.association.assign(self.instance, value)

    def __repr__(self) -> str:
        return f"<bound {self.association!r} of {self.instance!r}>"


# ── Strategies ───────────────────────────────────────────────────────────────


class HasMany(Association):
    """
    Parent → children. Wraps the primitive accessor and points every
    child's back-reference at the parent.
    """

    kind = "has_many"
    capabilities = Capability.READ_MANY

    def resolve(self, instance: Model) -> List[Any]:
        children = list(self.peek(instance) or ())
        key = instance._meta.singular_name

        # Nothing is linked unless every child can carry the back-reference.
        for child in children:
            if not capabilities_of(child, key) & Capability.WRITE_BACKREF:
                raise UnsupportedRelationError(
                    type(child).__name__, key,
                    f"no back-reference to '{type(instance).__name__}'",
                )
        for child in children:
            _link(child, key, instance)

        logger.debug(
            "%r resolved %d children for %r", self, len(children), instance,
        )
        return children


class HasOne(Association):
    """Parent → single child. Links the child only if it can carry the link."""

    kind = "has_one"
    capabilities = Capability.READ_ONE

    def resolve(self, instance: Model) -> Any:
        child = self.peek(instance)
        if child is None:
            return None
        key = instance._meta.singular_name
        if capabilities_of(child, key) & Capability.WRITE_BACKREF:
            _link(child, key, instance)
        return child


class BelongsTo(Association):
    """Child → parent. Plain get/set on the instance's back-reference slot."""

    kind = "belongs_to"
    capabilities = Capability.READ_ONE | Capability.WRITE_BACKREF

    def validate_name(self, owner: Optional[str]) -> None:
        if (
            not isinstance(self.name, str)
            or not self.name.isidentifier()
            or keyword.iskeyword(self.name)
        ):
            raise ConfigurationError(
                owner, self.name, "belongs_to requires a plain attribute name",
            )

    def __set__(self, instance: Any, value: Any) -> None:
        instance._backrefs[self.name] = value

    def assign(self, instance: Model, value: Any) -> None:
        instance._backrefs[self.name] = value

    def resolve(self, instance: Model) -> Any:
        return instance._backrefs.get(self.name)

    peek = resolve


class BelongsToMany(Association):
    """
    Child → many parents, where only the parents link to the child.

    The parents are found by loading every instance of the target model
    and keeping those whose plural (or, failing that, singular) link
    contains this instance. The result is cached per instance.
    """

    kind = "belongs_to_many"
    capabilities = Capability.READ_MANY | Capability.INVERSE

    def resolve(self, instance: Model) -> List[Any]:
        cache = instance._relation_cache
        if self.name in cache:
            return cache[self.name]

        from .registry import ModelRegistry

        target = ModelRegistry.get_by_key(self.name)
        if target is None:
            raise ModelNotFoundFault(self.name, metadata={"association": repr(self)})

        candidates = target.all().load()
        parents = [
            candidate for candidate in candidates
            if self._references(candidate, instance, ModelRegistry.settings.strict_inverse)
        ]
        cache[self.name] = parents

        logger.debug(
            "%r kept %d of %d %s for %r",
            self, len(parents), len(candidates), target.__name__, instance,
        )
        return parents

    def peek(self, instance: Model) -> Any:
        return instance._relation_cache.get(self.name)

    def _references(self, candidate: Any, instance: Model, strict: bool) -> bool:
        singular, plural = instance._meta.keys
        table = type(candidate)._associations

        plural_caps = capabilities_of(candidate, plural)
        if plural_caps & Capability.READ_MANY and not plural_caps & Capability.INVERSE:
            children = table[plural].peek(candidate) or ()
            return instance.id in [getattr(child, "id", None) for child in children]

        if capabilities_of(candidate, singular) & Capability.READ_ONE:
            child = table[singular].peek(candidate)
            return child is not None and getattr(child, "id", None) == instance.id

        if strict:
            raise UnsupportedRelationError(
                type(candidate).__name__, plural,
                f"neither '{plural}' nor '{singular}' is declared",
            )
        logger.debug(
            "%r skipped %r: no '%s' or '%s' association", self, candidate, plural, singular,
        )
        return False


# ── Declaration API ──────────────────────────────────────────────────────────


def has_many(name: Optional[str] = None, **options: Any) -> HasMany:
    """Declare a one-to-many association named after the child's plural key."""
    return HasMany(name, **options)


def has_one(name: Optional[str] = None, **options: Any) -> HasOne:
    """Declare a one-to-one association named after the child's singular key."""
    return HasOne(name, **options)


def belongs_to(name: Optional[str] = None, **options: Any) -> BelongsTo:
    """Declare a back-reference named after the parent's singular key."""
    return BelongsTo(name, **options)


def belongs_to_many(name: Optional[str] = None, **options: Any) -> BelongsToMany:
    """Declare an inverse many-to-many named after the parent's plural key."""
    return BelongsToMany(name, **options)
