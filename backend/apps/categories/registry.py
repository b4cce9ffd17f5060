"""
Registry of categorized model fields.

A model field becomes categorized by registering a ``CategorizationConfig``
for it, either directly::

    categorization_registry.register(
        CategorizationConfig(model=Article, field_name="tags", size=MANY)
    )

or with the class decorator::

    @categorized_with("city", from_key="cities")
    class Article(models.Model):
        ...
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type, Union

from django.apps import apps
from django.conf import settings
from django.db import models

from .exceptions import CategorizationNotFoundError

MANY = "many"

DEFAULT_SIZE = 1

DEFAULT_SEPARATOR = "##"


class CategorizationRegistryError(Exception):
    """Exception raised for categorization registry errors."""

    pass


@dataclass
class CategorizationConfig:
    """
    Categorization settings for one field of one model.

    ``size`` is the maximum number of categories the field holds; ``None`` or
    ``"many"`` means unlimited. ``from_key`` is the key of the category set the
    field draws from and defaults to the field name.
    """

    model: Type[models.Model]
    field_name: str
    from_key: Optional[str] = None
    size: Union[int, str, None] = DEFAULT_SIZE
    separator: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.size == MANY:
            self.size = None
        if self.from_key is None:
            self.from_key = self.field_name
        if self.separator is None:
            self.separator = getattr(
                settings, "CATEGORIES_DEFAULT_SEPARATOR", DEFAULT_SEPARATOR
            )
        self._validate_config()

    def _validate_config(self):
        errors = []

        if not self.field_name:
            errors.append("field_name is required")

        if self.size is not None and (
            isinstance(self.size, bool)
            or not isinstance(self.size, int)
            or self.size < 1
        ):
            errors.append(f"size must be a positive integer or '{MANY}', got {self.size!r}")

        if not self.separator:
            errors.append("separator cannot be empty")

        if errors:
            raise CategorizationRegistryError(
                f"Invalid categorization for {self.model_label}.{self.field_name}: "
                + "; ".join(errors)
            )

    @property
    def model_label(self) -> str:
        return self.model._meta.label_lower

    @property
    def is_unlimited(self) -> bool:
        return self.size is None

    @property
    def is_single(self) -> bool:
        return self.size == 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "model_label": self.model_label,
            "field_name": self.field_name,
            "from_key": self.from_key,
            "size": MANY if self.size is None else self.size,
            "separator": self.separator,
        }


class CategorizationRegistry:
    """Keeps the categorized fields of every model."""

    def __init__(self):
        self._configs: Dict[Type[models.Model], Dict[str, CategorizationConfig]] = {}

    def register(self, config: CategorizationConfig):
        """
        Register a categorized field.

        Raises:
            CategorizationRegistryError: If the field is already registered
        """
        fields = self._configs.setdefault(config.model, {})
        if config.field_name in fields:
            raise CategorizationRegistryError(
                f"{config.model_label}.{config.field_name} is already categorized"
            )
        fields[config.field_name] = config

    def unregister(self, model: Type[models.Model], field_name: Optional[str] = None):
        if field_name is None:
            self._configs.pop(model, None)
        else:
            self._configs.get(model, {}).pop(field_name, None)

    def get_configs(self, model: Type[models.Model]) -> Dict[str, CategorizationConfig]:
        """Return the categorized fields of ``model``, including inherited ones."""
        configs: Dict[str, CategorizationConfig] = {}
        for klass in reversed(model.__mro__):
            configs.update(self._configs.get(klass, {}))
        return configs

    def get_config(self, model: Type[models.Model], field_name: str) -> CategorizationConfig:
        """
        Return the config of ``model.field_name``.

        Raises:
            CategorizationNotFoundError: If the field is not categorized
        """
        config = self.get_configs(model).get(field_name)
        if config is None:
            raise CategorizationNotFoundError(
                f"{model._meta.label_lower} has no categorized field '{field_name}'"
            )
        return config

    def is_model_registered(self, model: Type[models.Model]) -> bool:
        return bool(self.get_configs(model))

    def get_model_by_label(self, model_label: str) -> Optional[Type[models.Model]]:
        """Return the categorized model labelled ``app_label.model``, or None."""
        try:
            model = apps.get_model(model_label)
        except (LookupError, ValueError):
            return None
        return model if self.is_model_registered(model) else None

    def get_all_configs(self) -> List[CategorizationConfig]:
        return [
            config for fields in self._configs.values() for config in fields.values()
        ]

    def clear(self):
        self._configs.clear()


# Global registry instance
categorization_registry = CategorizationRegistry()


def categorized_with(field_name: str, **options):
    """Class decorator registering ``field_name`` of the decorated model."""

    def decorator(model):
        categorization_registry.register(
            CategorizationConfig(model=model, field_name=field_name, **options)
        )
        return model

    return decorator
