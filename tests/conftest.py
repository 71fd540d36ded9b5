"""
Shared test fixtures and helpers for the backlink test suite.
"""

from types import SimpleNamespace

import pytest

from backlink.models import (
    MemorySource,
    Model,
    ModelRegistry,
    belongs_to,
    belongs_to_many,
    has_many,
    has_one,
)


@pytest.fixture(autouse=True)
def clean_registry():
    """Every test defines its own models against an empty registry."""
    ModelRegistry.reset()
    yield
    ModelRegistry.reset()


@pytest.fixture
def source():
    source = MemorySource()
    ModelRegistry.set_source(source)
    return source


@pytest.fixture
def blog():
    """Category → Post → Tag content model, declared both ways."""

    class Category(Model):
        posts = has_many("posts")

        class Meta:
            plural_name = "categories"

    class Post(Model):
        class Meta:
            associations = [belongs_to("category"), has_many("tags")]

    class Tag(Model):
        posts = belongs_to_many("posts")

    class Author(Model):
        profile = has_one("profile")

    class Profile(Model):
        author = belongs_to("author")

    return SimpleNamespace(
        Category=Category, Post=Post, Tag=Tag, Author=Author, Profile=Profile,
    )
