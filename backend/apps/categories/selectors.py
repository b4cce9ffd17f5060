"""
Selector decisions for category widgets.

Frontends render one of three widgets for a categorized field: a checkbox
list, a single select, or an autocomplete input. The choice depends only on
how many categories are available and how many may be selected.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .exceptions import ValidationError
from .models import Category, CategorySet
from .services import AssociationManager

CHECKBOX = "checkbox"
SELECT = "select"
AUTOCOMPLETE = "autocomplete"

SELECTOR_MODES = (CHECKBOX, SELECT, AUTOCOMPLETE)

# Above this many categories the simple widgets become unusable
MAX_CATEGORIES_SIMPLE_SELECTOR = 6


def selector_mode(available_count: int, max_selectable: Optional[int]) -> str:
    """
    Choose the widget for a field.

    ``max_selectable`` is the field size, ``None`` when unlimited.
    """
    if available_count > MAX_CATEGORIES_SIMPLE_SELECTOR:
        return AUTOCOMPLETE
    if max_selectable is None or max_selectable > 1:
        return CHECKBOX
    return SELECT


@dataclass
class SelectorOptions:
    mode: str
    category_set: CategorySet
    max_selectable: Optional[int]
    categories: List[Category] = field(default_factory=list)
    selected: List[Category] = field(default_factory=list)


def selector_options(
    model_or_obj,
    field_name: str,
    locale: Optional[str] = None,
    mode: Optional[str] = None,
    manager: Optional[AssociationManager] = None,
) -> SelectorOptions:
    """
    Everything a frontend needs to render the selector of ``field_name``.

    When an object is given its current categories are returned as
    ``selected`` and, unless ``locale`` is passed, its locale is used to pick
    the offered categories. ``mode`` forces a widget instead of choosing one.
    """
    manager = manager or AssociationManager()
    config = manager.get_config(model_or_obj, field_name)
    category_set = manager.get_category_set(config)

    obj = None if isinstance(model_or_obj, type) else model_or_obj
    if locale is None and obj is not None:
        locale = manager.connector.locale_for(obj)

    categories = manager.connector.categories_for_set(category_set, locale)
    selected = manager.get_many(obj, field_name) if obj is not None else []

    if mode is None:
        mode = selector_mode(len(categories), config.size)
    elif mode not in SELECTOR_MODES:
        raise ValidationError(errors={"mode": [f"Unknown selector mode '{mode}'"]})

    return SelectorOptions(
        mode=mode,
        category_set=category_set,
        max_selectable=config.size,
        categories=categories,
        selected=selected,
    )
