"""
Categories URL configuration.
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import views

app_name = "categories"

router = DefaultRouter()
router.register(r"sets", views.CategorySetViewSet, basename="categoryset")

category_list = views.CategoryViewSet.as_view({"get": "list", "post": "create"})
category_detail = views.CategoryViewSet.as_view(
    {
        "get": "retrieve",
        "put": "update",
        "patch": "partial_update",
        "delete": "destroy",
    }
)

urlpatterns = [
    path("", include(router.urls)),
    path("sets/<int:set_pk>/categories/", category_list, name="category-list"),
    path(
        "sets/<int:set_pk>/categories/<int:pk>/",
        category_detail,
        name="category-detail",
    ),
    path("selector/", views.SelectorView.as_view(), name="selector"),
]
