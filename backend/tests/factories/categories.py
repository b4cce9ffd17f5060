"""
Factories for category sets, categories and categorized host objects.
"""

import factory
import factory.django

from apps.categories.models import Category, CategoryRelation, CategorySet
from tests.testapp.models import Article, Event

from .base import BaseFactory


class CategorySetFactory(BaseFactory):
    """Factory for category sets."""

    class Meta:
        model = CategorySet
        django_get_or_create = ("key",)

    name = factory.Faker("word")
    key = factory.Sequence(lambda n: f"set_{n}")
    is_editable = True


class CategoryFactory(BaseFactory):
    """Factory for categories."""

    class Meta:
        model = Category

    category_set = factory.SubFactory(CategorySetFactory)
    name = factory.Sequence(lambda n: f"Category {n}")
    description = factory.Faker("sentence", nb_words=6)
    locale = ""


class ArticleFactory(BaseFactory):

    class Meta:
        model = Article

    title = factory.Faker("sentence", nb_words=4)


class EventFactory(BaseFactory):

    class Meta:
        model = Event

    name = factory.Faker("sentence", nb_words=3)
    locale = ""


class CategoryRelationFactory(BaseFactory):
    """Factory for relations; defaults to an article's tags field."""

    class Meta:
        model = CategoryRelation

    related_object = factory.SubFactory(ArticleFactory)
    category = factory.SubFactory(CategoryFactory)
    field_name = "tags"
    position = factory.Sequence(lambda n: n + 1)
