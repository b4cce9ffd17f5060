"""Category store and association services.

``CategoryStore`` owns category sets and categories. ``AssociationManager``
relates model instances to categories through their categorized fields,
enforcing the size configured for each field.
"""

import logging
from typing import Any, List, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.db.models import Max

from .connectors import BaseConnector, get_connector
from .exceptions import (
    CreationNotAllowedError,
    DuplicateError,
    LimitError,
    SetNotFoundError,
    ValidationError,
    from_django_validation_error,
)
from .models import Category, CategoryRelation, CategorySet, relation_content_type
from .registry import CategorizationConfig, CategorizationRegistry, categorization_registry
from .utils import as_list, normalize_name, split_names, unique_names

logger = logging.getLogger(__name__)


def _save(instance):
    """Validate and save ``instance``, raising categories errors."""
    try:
        instance.full_clean()
    except DjangoValidationError as e:
        raise from_django_validation_error(e) from e

    try:
        with transaction.atomic():
            instance.save()
    except IntegrityError as e:
        # Lost a race against a concurrent insert of the same unique value
        raise DuplicateError(str(e)) from e
    return instance


class CategoryStore:
    """Creates and looks up category sets and categories."""

    def __init__(self, connector: Optional[BaseConnector] = None):
        self.connector = connector or get_connector()

    def create_set(self, name: str, key: str, is_editable: bool = True) -> CategorySet:
        category_set = _save(
            CategorySet(name=name or "", key=key or "", is_editable=is_editable)
        )
        logger.info("Created category set %s (%s)", category_set.key, category_set.pk)
        return category_set

    def set_editable(self, category_set: CategorySet, editable: bool = True) -> CategorySet:
        category_set.is_editable = editable
        category_set.save(update_fields=["is_editable", "updated_at"])
        logger.info(
            "Category set %s is now %s",
            category_set.key,
            "editable" if editable else "not editable",
        )
        return category_set

    def update_set(self, category_set: CategorySet, **fields) -> CategorySet:
        for attr in ("name", "key", "is_editable"):
            if attr in fields:
                setattr(category_set, attr, fields[attr])
        return _save(category_set)

    def find_set_by_key(self, key: str) -> CategorySet:
        try:
            return CategorySet.objects.get(key=key)
        except CategorySet.DoesNotExist:
            raise SetNotFoundError(f"CategorySet with key '{key}' not found") from None

    def create_category(
        self,
        category_set: CategorySet,
        name: str,
        locale: Optional[str] = None,
        description: str = "",
        implicit: bool = False,
        group_id=None,
    ) -> Category:
        """
        Create a category in ``category_set``.

        ``implicit`` marks creations triggered by a bare name (e.g. while
        tagging an object); those are refused by sets that are not editable.
        """
        name = normalize_name(name)
        if not name:
            raise ValidationError(errors={"name": ["This field cannot be blank."]})

        if implicit and not category_set.is_editable:
            logger.warning(
                "Refused to create category %r in non editable set %s",
                name,
                category_set.key,
            )
            raise CreationNotAllowedError(
                f"Category set '{category_set.key}' does not allow new categories"
            )

        category = self.connector.new_category(category_set, name, locale)
        category.description = description or ""
        if group_id is not None:
            category.group_id = group_id
        return _save(category)

    def update_category(self, category: Category, **fields) -> Category:
        if "name" in fields:
            fields["name"] = normalize_name(fields["name"])
        if "locale" in fields:
            fields["locale"] = fields["locale"] or ""
        for attr in ("name", "description", "locale"):
            if attr in fields:
                setattr(category, attr, fields[attr])
        return _save(category)

    def add_to_set(
        self, category_set: CategorySet, items: Any, locale: Optional[str] = None
    ) -> List[Category]:
        """
        Add categories or plain names to ``category_set``.

        Blank items are dropped and items already in the set are skipped.
        Returns the categories that were created.
        """
        created: List[Category] = []
        with transaction.atomic():
            existing = set(
                category_set.categories.in_locale(locale).values_list("name", flat=True)
            )
            for item in as_list(items):
                name = normalize_name(item)
                if isinstance(item, Category):
                    if item.category_set_id != category_set.pk:
                        raise ValidationError(
                            f"Category '{name}' belongs to another category set"
                        )
                    continue

                if not name or name in existing:
                    continue

                created.append(
                    self.create_category(category_set, name, locale=locale, implicit=True)
                )
                existing.add(name)
        return created

    def create_translation(self, category: Category, name: str, locale: str) -> Category:
        """Create the ``locale`` variant of ``category``."""
        if category.in_locale(locale) is not None:
            raise DuplicateError(f"Category '{category}' already exists in '{locale}'")
        return self.create_category(
            category.category_set,
            name,
            locale=locale,
            description=category.description,
            group_id=category.group_id,
        )

    def select_fittest(
        self, category_set: CategorySet, item: Any, locale: Optional[str] = None
    ) -> Optional[Category]:
        """
        Find the category that best matches ``item`` in ``category_set``.

        ``item`` is a category or a name. With a ``locale`` the exact locale
        match wins, otherwise the match's variant in that locale is used. If
        no variant exists in ``locale``, or the category belongs to another
        set, the result is None.
        """
        if isinstance(item, Category):
            if item.category_set_id != category_set.pk:
                return None
            category = item
        else:
            name = normalize_name(item)
            if not name:
                return None
            candidates = category_set.categories.named(name)
            if locale:
                exact = candidates.in_locale(locale).first()
                if exact is not None:
                    return exact
            category = candidates.in_locale(None).first() or candidates.first()

        if category is None or not locale:
            return category
        return category.in_locale(locale)


class AssociationManager:
    """Attaches categories to the categorized fields of model instances."""

    def __init__(
        self,
        store: Optional[CategoryStore] = None,
        registry: Optional[CategorizationRegistry] = None,
        connector: Optional[BaseConnector] = None,
    ):
        if connector is None:
            connector = store.connector if store is not None else get_connector()
        self.connector = connector
        self.store = store or CategoryStore(connector=connector)
        self.registry = registry or categorization_registry

    def get_config(self, obj_or_model, field_name: str) -> CategorizationConfig:
        model = obj_or_model if isinstance(obj_or_model, type) else type(obj_or_model)
        return self.registry.get_config(model, field_name)

    def get_category_set(self, config: CategorizationConfig) -> CategorySet:
        return self.store.find_set_by_key(config.from_key)

    def relations(self, obj, field_name: str):
        return CategoryRelation.objects.filter(
            content_type=relation_content_type(obj),
            object_id=obj.pk,
            field_name=field_name,
        ).select_related("category")

    def get_many(self, obj, field_name: str) -> List[Category]:
        self.get_config(obj, field_name)
        if obj.pk is None:
            return []
        return [relation.category for relation in self.relations(obj, field_name)]

    def get_one(self, obj, field_name: str) -> Optional[Category]:
        config = self.get_config(obj, field_name)
        if not config.is_single:
            raise ValueError(
                f"{config.model_label}.{field_name} holds many categories, use get_many()"
            )
        categories = self.get_many(obj, field_name)
        return categories[0] if categories else None

    def get(self, obj, field_name: str):
        """``get_one`` for single category fields, ``get_many`` otherwise."""
        if self.get_config(obj, field_name).is_single:
            return self.get_one(obj, field_name)
        return self.get_many(obj, field_name)

    def count(self, obj, field_name: str) -> int:
        if obj.pk is None:
            return 0
        return self.relations(obj, field_name).count()

    def _current_names(self, obj, field_name: str) -> List[str]:
        return [normalize_name(category) for category in self.get_many(obj, field_name)]

    def has_category(self, obj, field_name: str, item: Any) -> bool:
        return normalize_name(item) in self._current_names(obj, field_name)

    def is_full(self, obj, field_name: str) -> bool:
        config = self.get_config(obj, field_name)
        if config.is_unlimited:
            return False
        return self.count(obj, field_name) >= config.size

    def would_overflow(self, obj, field_name: str, candidates: Any) -> bool:
        """True if adding ``candidates`` would exceed the field size."""
        config = self.get_config(obj, field_name)
        if config.is_unlimited:
            return False
        current = self._current_names(obj, field_name)
        new = [name for name in unique_names(candidates) if name not in current]
        return len(current) + len(new) > config.size

    def add_categories(self, obj, field_name: str, items: Any) -> List[Category]:
        """
        Relate ``items`` (categories or names) to ``obj.field_name``.

        Names are added to the field's category set first, so new names are
        created when the set is editable. Items already related are skipped.
        Nothing is written if any item would exceed the field size.

        Returns:
            The categories that were newly related

        Raises:
            LimitError: If the field cannot hold another category
            CreationNotAllowedError: If a new name targets a non editable set
        """
        config = self.get_config(obj, field_name)
        if obj.pk is None:
            raise ValidationError("Objects must be saved before they are categorized")
        category_set = self.get_category_set(config)
        content_type = relation_content_type(obj)

        added: List[Category] = []
        with transaction.atomic():
            categories = self.connector.assign_to_set(self.store, category_set, items, obj)

            relations = self.relations(obj, field_name)
            present = {normalize_name(relation.category) for relation in relations}
            count = len(relations)
            position = relations.aggregate(top=Max("position"))["top"] or 0

            for category in categories:
                name = normalize_name(category)
                if name in present:
                    continue
                if not config.is_unlimited and count >= config.size:
                    logger.warning(
                        "Category limit of %s reached for %s.%s (%s)",
                        config.size,
                        config.model_label,
                        field_name,
                        obj.pk,
                    )
                    raise LimitError(
                        f"{field_name} accepts at most {config.size} categories"
                    )

                position += 1
                CategoryRelation.objects.create(
                    content_type=content_type,
                    object_id=obj.pk,
                    category=category,
                    field_name=field_name,
                    position=position,
                )
                present.add(name)
                count += 1
                added.append(category)

        logger.debug(
            "Related %s categories to %s.%s (%s)",
            len(added),
            config.model_label,
            field_name,
            obj.pk,
        )
        return added

    def set_from_separated_string(
        self, obj, field_name: str, text: str, separator: Optional[str] = None
    ) -> List[Category]:
        """Add every name of a separator delimited string, all or nothing."""
        config = self.get_config(obj, field_name)
        names = split_names(text, separator or config.separator)
        if self.would_overflow(obj, field_name, names):
            raise LimitError(f"{field_name} accepts at most {config.size} categories")
        return self.add_categories(obj, field_name, names)

    def replace_categories(self, obj, field_name: str, items: Any) -> List[Category]:
        """Replace every category of ``obj.field_name`` with ``items``."""
        config = self.get_config(obj, field_name)
        if isinstance(items, str):
            items = split_names(items, config.separator)
        items = [item for item in as_list(items) if normalize_name(item)]

        if not config.is_unlimited and len(unique_names(items)) > config.size:
            raise LimitError(f"{field_name} accepts at most {config.size} categories")

        with transaction.atomic():
            self.remove_all(obj, field_name)
            return self.add_categories(obj, field_name, items)

    def remove_category(self, obj, field_name: str, item: Any) -> bool:
        self.get_config(obj, field_name)
        deleted, _ = (
            self.relations(obj, field_name)
            .filter(category__name=normalize_name(item))
            .delete()
        )
        return bool(deleted)

    def remove_all(self, obj, field_name: Optional[str] = None) -> int:
        """Delete the relations of one field of ``obj``, or of all its fields."""
        relations = CategoryRelation.objects.filter(
            content_type=relation_content_type(obj), object_id=obj.pk
        )
        if field_name is not None:
            relations = relations.filter(field_name=field_name)
        deleted, _ = relations.delete()
        return deleted

    def filter_by_categories(self, queryset, field_name: str, names: Any):
        """Restrict ``queryset`` to objects tagged with any of ``names``."""
        model = queryset.model
        config = self.get_config(model, field_name)
        category_set = self.get_category_set(config)

        identifiers = [
            self.connector.category_identifier_for_name(self.store, category_set, name)
            for name in unique_names(names)
        ]
        identifiers = [identifier for identifier in identifiers if identifier is not None]
        if not identifiers:
            return queryset.none()

        relations = CategoryRelation.objects.filter(
            content_type=relation_content_type(model),
            field_name=field_name,
        ).filter(self.connector.category_identifier_condition(identifiers))
        return queryset.filter(pk__in=relations.values("object_id"))
