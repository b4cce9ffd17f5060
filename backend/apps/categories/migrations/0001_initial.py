# Initial schema for category sets, categories and their relations

import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("contenttypes", "0002_remove_content_type_name"),
    ]

    operations = [
        migrations.CreateModel(
            name="CategorySet",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                (
                    "key",
                    models.CharField(
                        help_text="Stable identifier used by models",
                        max_length=100,
                        unique=True,
                    ),
                ),
                (
                    "is_editable",
                    models.BooleanField(
                        default=True,
                        help_text="Allow new categories to be created from plain names",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Category set",
                "verbose_name_plural": "Category sets",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Category",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                (
                    "locale",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Language code, empty for unlocalized categories",
                        max_length=10,
                    ),
                ),
                ("group_id", models.UUIDField(db_index=True, default=uuid.uuid4)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "category_set",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="categories",
                        to="categories.categoryset",
                    ),
                ),
            ],
            options={
                "verbose_name": "Category",
                "verbose_name_plural": "Categories",
                "ordering": ["name"],
                "indexes": [
                    models.Index(
                        fields=["category_set", "locale"],
                        name="category_set_locale_idx",
                    )
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("category_set", "name", "locale"),
                        name="unique_category_name_per_set_locale",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="CategoryRelation",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("object_id", models.PositiveBigIntegerField()),
                (
                    "field_name",
                    models.CharField(
                        help_text="Categorized field this relation belongs to",
                        max_length=100,
                    ),
                ),
                ("position", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "category",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="relations",
                        to="categories.category",
                    ),
                ),
                (
                    "content_type",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        to="contenttypes.contenttype",
                    ),
                ),
            ],
            options={
                "verbose_name": "Category relation",
                "verbose_name_plural": "Category relations",
                "ordering": ["position", "id"],
                "indexes": [
                    models.Index(
                        fields=["content_type", "object_id", "field_name"],
                        name="category_relation_object_idx",
                    )
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("content_type", "object_id", "category", "field_name"),
                        name="unique_category_relation",
                    )
                ],
            },
        ),
    ]
