"""Categories serializers for API endpoints."""

from rest_framework import serializers

from .models import Category, CategorySet
from .selectors import SELECTOR_MODES
from .services import CategoryStore


class CategorySetSerializer(serializers.ModelSerializer):
    """Serializer for CategorySet model."""

    category_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = CategorySet
        fields = [
            "id",
            "name",
            "key",
            "is_editable",
            "category_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "category_count", "created_at", "updated_at"]
        # Uniqueness is enforced by the store so duplicates keep their own error code
        extra_kwargs = {"key": {"validators": []}}

    def create(self, validated_data):
        return CategoryStore().create_set(
            name=validated_data["name"],
            key=validated_data["key"],
            is_editable=validated_data.get("is_editable", True),
        )

    def update(self, instance, validated_data):
        return CategoryStore().update_set(instance, **validated_data)


class CategorySetEditableSerializer(serializers.Serializer):
    is_editable = serializers.BooleanField()


class CategorySerializer(serializers.ModelSerializer):
    """Serializer for Category model."""

    category_set_key = serializers.CharField(source="category_set.key", read_only=True)

    class Meta:
        model = Category
        fields = [
            "id",
            "category_set",
            "category_set_key",
            "name",
            "description",
            "locale",
            "group_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "category_set",
            "group_id",
            "created_at",
            "updated_at",
        ]
        validators = []

    def create(self, validated_data):
        return CategoryStore().create_category(
            self.context["category_set"],
            validated_data["name"],
            locale=validated_data.get("locale"),
            description=validated_data.get("description", ""),
        )

    def update(self, instance, validated_data):
        return CategoryStore().update_category(instance, **validated_data)


class CategoryOptionSerializer(serializers.ModelSerializer):
    """Lightweight serializer for selector options."""

    class Meta:
        model = Category
        fields = ["id", "name", "locale"]


class SelectorQuerySerializer(serializers.Serializer):
    model = serializers.CharField(help_text="Model label, e.g. 'news.article'")
    field = serializers.CharField()
    object_id = serializers.IntegerField(required=False)
    locale = serializers.CharField(required=False)
    mode = serializers.ChoiceField(choices=SELECTOR_MODES, required=False)


class SelectorOptionsSerializer(serializers.Serializer):
    mode = serializers.CharField()
    category_set = serializers.CharField(source="category_set.key")
    max_selectable = serializers.IntegerField(allow_null=True)
    categories = CategoryOptionSerializer(many=True)
    selected = CategoryOptionSerializer(many=True)
