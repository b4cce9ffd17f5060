from django.db import IntegrityError, transaction
from django.test import TestCase

from apps.categories.models import Category, CategoryRelation, CategorySet
from tests.factories import (
    ArticleFactory,
    CategoryFactory,
    CategoryRelationFactory,
    CategorySetFactory,
)


class CategorySetModelTests(TestCase):

    def test_str(self):
        self.assertEqual(str(CategorySetFactory(name="Tags")), "Tags")

    def test_editable_queryset(self):
        tags = CategorySetFactory(key="tags")
        CategorySetFactory(key="cities", is_editable=False)

        self.assertEqual(list(CategorySet.objects.editable()), [tags])

    def test_delete_cascades(self):
        relation = CategoryRelationFactory()

        relation.category.category_set.delete()

        self.assertEqual(Category.objects.count(), 0)
        self.assertEqual(CategoryRelation.objects.count(), 0)


class CategoryModelTests(TestCase):

    def setUp(self):
        self.category_set = CategorySetFactory(key="colors")
        self.red = CategoryFactory(category_set=self.category_set, name="Red", locale="en")
        self.rojo = CategoryFactory(
            category_set=self.category_set,
            name="Rojo",
            locale="es",
            group_id=self.red.group_id,
        )

    def test_str(self):
        self.assertEqual(str(self.red), "Red")

    def test_is_locale(self):
        self.assertTrue(self.red.is_locale("en"))
        self.assertFalse(self.red.is_locale("es"))
        self.assertTrue(CategoryFactory(locale="").is_locale(None))

    def test_in_locale(self):
        self.assertEqual(self.red.in_locale("es"), self.rojo)
        self.assertEqual(self.red.in_locale("en"), self.red)
        self.assertIsNone(self.red.in_locale("fr"))

    def test_translations(self):
        self.assertEqual(list(self.rojo.translations()), [self.red])

    def test_queryset_helpers(self):
        self.assertEqual(list(Category.objects.in_locale("es")), [self.rojo])
        self.assertEqual(list(Category.objects.named("Red")), [self.red])

    def test_unique_name_per_set_and_locale(self):
        with self.assertRaises(IntegrityError), transaction.atomic():
            Category.objects.create(category_set=self.category_set, name="Red", locale="en")


class CategoryRelationModelTests(TestCase):

    def test_related_object(self):
        article = ArticleFactory(title="Hello")
        relation = CategoryRelationFactory(related_object=article)

        relation.refresh_from_db()
        self.assertEqual(relation.related_object, article)
        self.assertEqual(str(relation), f"tags: {relation.category.name}")

    def test_no_duplicate_relation(self):
        relation = CategoryRelationFactory()

        with self.assertRaises(IntegrityError), transaction.atomic():
            CategoryRelation.objects.create(
                content_type=relation.content_type,
                object_id=relation.object_id,
                category=relation.category,
                field_name=relation.field_name,
            )

    def test_ordered_by_position(self):
        article = ArticleFactory()
        second = CategoryRelationFactory(related_object=article, position=2)
        first = CategoryRelationFactory(related_object=article, position=1)

        self.assertEqual(list(CategoryRelation.objects.all()), [first, second])
