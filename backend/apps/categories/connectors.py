"""
Connectors bundle the integration points of the categories app.

The services never assume how categories are identified or localized; they
ask the connector. ``StandardConnector`` identifies categories by primary key
and ignores locales. ``I18nConnector`` follows the host object's locale and
identifies categories by their translation group, so a query for "Red" also
matches objects tagged with "Rojo".

The active connector is read from the ``CATEGORIES_CONNECTOR`` setting, or
passed explicitly to ``CategoryStore`` / ``AssociationManager``.
"""

import logging
from typing import Any, List, Optional

from django.conf import settings
from django.db.models import Q
from django.utils.module_loading import import_string

from .models import Category
from .utils import as_list, normalize_name

logger = logging.getLogger(__name__)

DEFAULT_CONNECTOR = "apps.categories.connectors.StandardConnector"


class BaseConnector:
    """Default behaviour shared by every connector."""

    name = "base"

    def locale_for(self, obj) -> Optional[str]:
        """Locale new categories take when assigned through ``obj``."""
        return None

    def new_category(self, category_set, name: str, locale: Optional[str] = None):
        """Build an unsaved category for ``name``."""
        return Category(category_set=category_set, name=name, locale=locale or "")

    def assign_to_set(self, store, category_set, items: Any, obj=None) -> List[Category]:
        """
        Add ``items`` to ``category_set`` and return the categories that will
        be related to ``obj``, in order and without duplicates.
        """
        locale = self.locale_for(obj)
        items = [item for item in as_list(items) if normalize_name(item)]
        store.add_to_set(category_set, items, locale=locale)

        categories: List[Category] = []
        for item in items:
            category = self.select_fittest(store, category_set, item, locale)
            if category is not None and category not in categories:
                categories.append(category)
        return categories

    def select_fittest(self, store, category_set, item: Any, locale: Optional[str] = None):
        return store.select_fittest(category_set, item, locale=locale)

    def categories_for_set(self, category_set, locale: Optional[str] = None):
        """Categories offered for selection in ``category_set``."""
        return list(category_set.categories.all())

    def category_identifier_for_name(self, store, category_set, name: str):
        raise NotImplementedError

    def category_identifier_condition(self, identifiers) -> Q:
        """Condition on ``CategoryRelation`` matching ``identifiers``."""
        raise NotImplementedError


class StandardConnector(BaseConnector):

    name = "standard"

    def category_identifier_for_name(self, store, category_set, name: str):
        category = self.select_fittest(store, category_set, name)
        return category.pk if category is not None else None

    def category_identifier_condition(self, identifiers) -> Q:
        return Q(category_id__in=list(identifiers))


class I18nConnector(BaseConnector):
    """Connector for hosts whose objects carry a locale."""

    name = "i18n"

    locale_attr = "locale"

    def locale_for(self, obj) -> Optional[str]:
        if obj is None:
            return None
        locale = getattr(obj, self.locale_attr, None)
        # Accept either a plain code or a locale model instance
        locale = getattr(locale, "code", locale)
        return locale or None

    def categories_for_set(self, category_set, locale: Optional[str] = None):
        categories = list(category_set.categories.all())
        if not locale:
            return categories

        # One category per translation group, preferring ``locale``
        chosen = {}
        for category in categories:
            current = chosen.get(category.group_id)
            if current is None or (
                category.is_locale(locale) and not current.is_locale(locale)
            ):
                chosen[category.group_id] = category
        return [c for c in categories if chosen.get(c.group_id) is c]

    def category_identifier_for_name(self, store, category_set, name: str):
        category = self.select_fittest(store, category_set, name)
        return category.group_id if category is not None else None

    def category_identifier_condition(self, identifiers) -> Q:
        return Q(category__group_id__in=list(identifiers))


def get_connector(path: Optional[str] = None) -> BaseConnector:
    """Instantiate the connector named by ``path`` or by the settings."""
    path = path or getattr(settings, "CATEGORIES_CONNECTOR", DEFAULT_CONNECTOR)
    connector_class = import_string(path)
    logger.debug("Using categories connector %s", path)
    return connector_class()
