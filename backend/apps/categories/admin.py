"""
Categories admin interface.
"""

from django.contrib import admin
from django.db.models import Count

from .models import Category, CategoryRelation, CategorySet
from .services import CategoryStore


class CategoryInline(admin.TabularInline):
    """Inline admin for the categories of a set."""

    model = Category
    fields = ("name", "locale", "description")
    extra = 1


@admin.register(CategorySet)
class CategorySetAdmin(admin.ModelAdmin):
    """Admin for category sets."""

    list_display = ("name", "key", "is_editable", "category_count", "created_at")
    list_filter = ("is_editable",)
    search_fields = ("name", "key")
    readonly_fields = ("created_at", "updated_at")
    inlines = [CategoryInline]
    actions = ["make_editable", "make_not_editable"]

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(category_count=Count("categories"))

    def category_count(self, obj):
        return obj.category_count

    category_count.short_description = "Categories"
    category_count.admin_order_field = "category_count"

    def _set_editable(self, queryset, editable):
        store = CategoryStore()
        category_sets = list(queryset)
        for category_set in category_sets:
            store.set_editable(category_set, editable)
        return len(category_sets)

    def make_editable(self, request, queryset):
        updated = self._set_editable(queryset, True)
        self.message_user(request, f"{updated} category sets are now editable.")

    make_editable.short_description = "Allow creating categories from names"

    def make_not_editable(self, request, queryset):
        updated = self._set_editable(queryset, False)
        self.message_user(request, f"{updated} category sets are no longer editable.")

    make_not_editable.short_description = "Forbid creating categories from names"


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    """Admin for categories."""

    list_display = ("name", "category_set", "locale", "created_at")
    list_filter = ("category_set", "locale")
    search_fields = ("name", "description")
    readonly_fields = ("group_id", "created_at", "updated_at")
    list_select_related = ("category_set",)


@admin.register(CategoryRelation)
class CategoryRelationAdmin(admin.ModelAdmin):
    """Read-mostly admin for relations."""

    list_display = ("category", "field_name", "content_type", "object_id", "position")
    list_filter = ("field_name", "content_type")
    raw_id_fields = ("category",)
    list_select_related = ("category", "content_type")
