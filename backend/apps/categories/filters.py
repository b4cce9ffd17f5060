"""
Search filters for category sets and categories.

Each filter narrows the queryset on its own; the FilterSet applies every
filter present in the data one after the other, so the results are the
intersection of all of them.
"""

import django_filters

from .exceptions import ValidationError
from .models import Category, CategorySet


class CategorySetFilter(django_filters.FilterSet):
    """Filters for category sets."""

    text = django_filters.CharFilter(field_name="name", lookup_expr="icontains")

    class Meta:
        model = CategorySet
        fields = ["text", "is_editable"]


class CategoryFilter(django_filters.FilterSet):
    """Filters for categories."""

    text = django_filters.CharFilter(field_name="name", lookup_expr="icontains")

    category_set_id = django_filters.NumberFilter(field_name="category_set_id")

    locale = django_filters.CharFilter(field_name="locale")

    class Meta:
        model = Category
        fields = ["text", "category_set_id", "locale"]


def _apply(filterset_class, filters, queryset):
    filterset = filterset_class(data=filters or {}, queryset=queryset)
    if not filterset.is_valid():
        raise ValidationError(
            errors={field: list(msgs) for field, msgs in filterset.errors.items()}
        )
    return filterset.qs


def filter_sets(filters=None, queryset=None):
    """Category sets matching ``filters`` (keys: ``text``, ``is_editable``)."""
    if queryset is None:
        queryset = CategorySet.objects.all()
    return _apply(CategorySetFilter, filters, queryset)


def filter_categories(filters=None, queryset=None):
    """Categories matching ``filters`` (keys: ``text``, ``category_set_id``, ``locale``)."""
    if queryset is None:
        queryset = Category.objects.select_related("category_set")
    return _apply(CategoryFilter, filters, queryset)
