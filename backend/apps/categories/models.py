import uuid

from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models
from django.db.models import (
    BooleanField,
    CharField,
    DateTimeField,
    ForeignKey,
    PositiveBigIntegerField,
    PositiveIntegerField,
    TextField,
    UUIDField,
)
from django.utils.translation import gettext_lazy as _


class CategorySetQuerySet(models.QuerySet):

    def editable(self):
        return self.filter(is_editable=True)


class CategorySet(models.Model):
    """A named, keyed vocabulary of categories."""

    name: CharField = models.CharField(max_length=255)

    key: CharField = models.CharField(
        max_length=100, unique=True, help_text=_("Stable identifier used by models")
    )

    is_editable: BooleanField = models.BooleanField(
        default=True,
        help_text=_("Allow new categories to be created from plain names"),
    )

    created_at: DateTimeField = models.DateTimeField(auto_now_add=True)

    updated_at: DateTimeField = models.DateTimeField(auto_now=True)

    objects = CategorySetQuerySet.as_manager()

    class Meta:
        verbose_name = _("Category set")
        verbose_name_plural = _("Category sets")
        ordering = ["name"]

    def __str__(self):
        return self.name


class CategoryQuerySet(models.QuerySet):

    def in_locale(self, locale):
        return self.filter(locale=locale or "")

    def named(self, name):
        return self.filter(name=name)


class Category(models.Model):
    """A single term inside a category set."""

    category_set: ForeignKey = models.ForeignKey(
        CategorySet, on_delete=models.CASCADE, related_name="categories"
    )

    name: CharField = models.CharField(max_length=255)

    description: TextField = models.TextField(blank=True)

    locale: CharField = models.CharField(
        max_length=10,
        blank=True,
        default="",
        help_text=_("Language code, empty for unlocalized categories"),
    )

    # Locale variants of the same term share a group id
    group_id: UUIDField = models.UUIDField(default=uuid.uuid4, db_index=True)

    created_at: DateTimeField = models.DateTimeField(auto_now_add=True)

    updated_at: DateTimeField = models.DateTimeField(auto_now=True)

    objects = CategoryQuerySet.as_manager()

    class Meta:
        verbose_name = _("Category")
        verbose_name_plural = _("Categories")
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["category_set", "name", "locale"],
                name="unique_category_name_per_set_locale",
            ),
        ]
        indexes = [
            models.Index(fields=["category_set", "locale"], name="category_set_locale_idx"),
        ]

    def __str__(self):
        return self.name

    def is_locale(self, locale) -> bool:
        return self.locale == (locale or "")

    def in_locale(self, locale):
        """Return the variant of this category in ``locale``, or None."""
        if self.is_locale(locale):
            return self
        return (
            Category.objects.filter(
                group_id=self.group_id, category_set_id=self.category_set_id
            )
            .in_locale(locale)
            .first()
        )

    def translations(self):
        return Category.objects.filter(group_id=self.group_id).exclude(pk=self.pk)


def relation_content_type(model_or_obj) -> ContentType:
    """
    Content type relations of ``model_or_obj`` are stored under.

    Multi-table subclasses share the row of their root concrete model, so
    relations are keyed on that root and a row reads the same categories
    whichever class it was loaded as.
    """
    opts = model_or_obj._meta
    parents = opts.get_parent_list()
    root = parents[-1] if parents else opts.concrete_model
    return ContentType.objects.get_for_model(root)


class CategoryRelation(models.Model):
    """Links any model instance's categorized field to a category."""

    content_type: ForeignKey = models.ForeignKey(ContentType, on_delete=models.CASCADE)

    object_id: PositiveBigIntegerField = models.PositiveBigIntegerField()

    related_object = GenericForeignKey("content_type", "object_id")

    category: ForeignKey = models.ForeignKey(
        Category, on_delete=models.CASCADE, related_name="relations"
    )

    field_name: CharField = models.CharField(
        max_length=100, help_text=_("Categorized field this relation belongs to")
    )

    position: PositiveIntegerField = models.PositiveIntegerField(default=0)

    created_at: DateTimeField = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Category relation")
        verbose_name_plural = _("Category relations")
        ordering = ["position", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["content_type", "object_id", "category", "field_name"],
                name="unique_category_relation",
            ),
        ]
        indexes = [
            models.Index(
                fields=["content_type", "object_id", "field_name"],
                name="category_relation_object_idx",
            ),
        ]

    def __str__(self):
        return f"{self.field_name}: {self.category}"
