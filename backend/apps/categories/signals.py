"""
Relation cleanup for categorized models.

Relations point at their objects through a generic key, so the database
cannot cascade them; they are removed here when a categorized object goes.
"""

import logging

from django.db.models.signals import pre_delete
from django.dispatch import receiver

from .models import CategoryRelation, relation_content_type
from .registry import categorization_registry

logger = logging.getLogger(__name__)


@receiver(pre_delete)
def delete_category_relations(sender, instance, **kwargs):
    """Delete every category relation of a categorized object being deleted."""
    if not categorization_registry.is_model_registered(sender) or instance.pk is None:
        return

    deleted, _ = CategoryRelation.objects.filter(
        content_type=relation_content_type(sender),
        object_id=instance.pk,
    ).delete()
    if deleted:
        logger.debug(
            "Deleted %s category relations of %s (%s)",
            deleted,
            sender._meta.label_lower,
            instance.pk,
        )
