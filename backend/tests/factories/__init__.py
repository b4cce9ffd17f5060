"""Test data factories for the categories test suites."""

from .base import AdminUserFactory, BaseFactory, UserFactory
from .categories import (
    ArticleFactory,
    CategoryFactory,
    CategoryRelationFactory,
    CategorySetFactory,
    EventFactory,
)

__all__ = [
    "BaseFactory",
    "UserFactory",
    "AdminUserFactory",
    "CategorySetFactory",
    "CategoryFactory",
    "CategoryRelationFactory",
    "ArticleFactory",
    "EventFactory",
]
