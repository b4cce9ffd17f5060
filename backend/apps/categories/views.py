"""
Categories API views and viewsets.
"""

import logging

from django.db.models import Count
from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import filters, permissions, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import CategorizationNotFoundError, NotFoundError
from .filters import CategoryFilter, CategorySetFilter
from .models import Category, CategorySet
from .registry import categorization_registry
from .selectors import selector_options
from .serializers import (
    CategorySerializer,
    CategorySetEditableSerializer,
    CategorySetSerializer,
    SelectorOptionsSerializer,
    SelectorQuerySerializer,
)
from .services import CategoryStore

logger = logging.getLogger(__name__)


class WritePermissionsMixin:
    """Reads need a login; writes need the model permissions."""

    def get_permissions(self):
        if self.action in ["list", "retrieve"]:
            return [IsAuthenticated()]
        return [IsAuthenticated(), permissions.DjangoModelPermissions()]


@extend_schema_view(
    list=extend_schema(description="List category sets, filterable by name text"),
    create=extend_schema(description="Create a category set"),
    retrieve=extend_schema(description="Get a category set by ID"),
    update=extend_schema(description="Update a category set"),
    partial_update=extend_schema(description="Partially update a category set"),
    destroy=extend_schema(description="Delete a category set and its categories"),
)
class CategorySetViewSet(WritePermissionsMixin, viewsets.ModelViewSet):
    """ViewSet for managing category sets."""

    serializer_class = CategorySetSerializer
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = CategorySetFilter
    ordering_fields = ["name", "key", "created_at"]
    ordering = ["name"]

    def get_queryset(self):
        return CategorySet.objects.annotate(category_count=Count("categories"))

    @extend_schema(
        methods=["post"],
        description="Allow or forbid creating categories from plain names",
        request=CategorySetEditableSerializer,
        responses={200: CategorySetSerializer},
    )
    @action(detail=True, methods=["post"])
    def editable(self, request, pk=None):
        category_set = self.get_object()
        serializer = CategorySetEditableSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        CategoryStore().set_editable(
            category_set, serializer.validated_data["is_editable"]
        )
        return Response(CategorySetSerializer(self.get_object()).data)


@extend_schema_view(
    list=extend_schema(
        description="List the categories of a set; the text filter serves autocomplete"
    ),
    create=extend_schema(description="Create a category in the set"),
    retrieve=extend_schema(description="Get a category"),
    update=extend_schema(description="Update a category"),
    partial_update=extend_schema(description="Partially update a category"),
    destroy=extend_schema(description="Delete a category and its relations"),
)
class CategoryViewSet(WritePermissionsMixin, viewsets.ModelViewSet):
    """ViewSet for the categories of one category set."""

    serializer_class = CategorySerializer
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = CategoryFilter
    ordering_fields = ["name", "created_at"]
    ordering = ["name"]

    def get_category_set(self):
        if not hasattr(self, "_category_set"):
            self._category_set = get_object_or_404(CategorySet, pk=self.kwargs["set_pk"])
        return self._category_set

    def get_queryset(self):
        return Category.objects.filter(category_set=self.get_category_set()).select_related(
            "category_set"
        )

    def get_serializer_context(self):
        context = super().get_serializer_context()
        if "set_pk" in self.kwargs:
            context["category_set"] = self.get_category_set()
        return context


class SelectorView(APIView):
    """Selector mode and options for a categorized field."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        parameters=[SelectorQuerySerializer],
        responses={200: SelectorOptionsSerializer},
    )
    def get(self, request):
        query = SelectorQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        model = categorization_registry.get_model_by_label(params["model"])
        if model is None:
            raise CategorizationNotFoundError(
                f"No categorized model with label '{params['model']}'"
            )

        target = model
        if "object_id" in params:
            target = model._default_manager.filter(pk=params["object_id"]).first()
            if target is None:
                raise NotFoundError(
                    f"{params['model']} with id {params['object_id']} not found"
                )

        options = selector_options(
            target,
            params["field"],
            locale=params.get("locale"),
            mode=params.get("mode"),
        )
        return Response(SelectorOptionsSerializer(options).data)
