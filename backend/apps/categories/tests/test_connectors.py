from types import SimpleNamespace

from django.test import TestCase, override_settings

from apps.categories.connectors import I18nConnector, StandardConnector, get_connector
from apps.categories.services import AssociationManager, CategoryStore
from tests.testapp.models import Event


class GetConnectorTests(TestCase):

    def test_default_from_settings(self):
        self.assertIsInstance(get_connector(), StandardConnector)

    @override_settings(CATEGORIES_CONNECTOR="apps.categories.connectors.I18nConnector")
    def test_setting_selects_connector(self):
        self.assertIsInstance(get_connector(), I18nConnector)
        self.assertIsInstance(CategoryStore().connector, I18nConnector)

    def test_explicit_path(self):
        connector = get_connector("apps.categories.connectors.I18nConnector")

        self.assertEqual(connector.name, "i18n")

    def test_unknown_path(self):
        with self.assertRaises(ImportError):
            get_connector("apps.categories.connectors.MissingConnector")


class StandardConnectorTests(TestCase):

    def setUp(self):
        self.connector = StandardConnector()
        self.store = CategoryStore(connector=self.connector)
        self.category_set = self.store.create_set("Topics", "topics")

    def test_ignores_object_locale(self):
        self.assertIsNone(self.connector.locale_for(Event(name="PyCon", locale="es")))

    def test_new_category_has_no_locale(self):
        category = self.connector.new_category(self.category_set, "web")

        self.assertIsNone(category.pk)
        self.assertEqual(category.locale, "")

    def test_identifier_is_primary_key(self):
        web = self.store.create_category(self.category_set, "web")

        self.assertEqual(
            self.connector.category_identifier_for_name(self.store, self.category_set, "web"),
            web.pk,
        )
        self.assertIsNone(
            self.connector.category_identifier_for_name(self.store, self.category_set, "data")
        )

    def test_offers_every_category(self):
        self.store.create_category(self.category_set, "web", locale="en")
        self.store.create_category(self.category_set, "data")

        self.assertEqual(
            len(self.connector.categories_for_set(self.category_set, locale="en")), 2
        )


class I18nConnectorTests(TestCase):

    def setUp(self):
        self.connector = I18nConnector()
        self.store = CategoryStore(connector=self.connector)
        self.manager = AssociationManager(store=self.store)
        self.category_set = self.store.create_set("Topics", "topics")
        self.blue = self.store.create_category(self.category_set, "Blue")
        self.red = self.store.create_category(self.category_set, "Red", locale="en")
        self.rojo = self.store.create_translation(self.red, "Rojo", "es")

    def test_locale_for(self):
        self.assertEqual(self.connector.locale_for(Event(name="PyCon", locale="es")), "es")
        self.assertIsNone(self.connector.locale_for(Event(name="PyCon")))
        self.assertIsNone(self.connector.locale_for(None))

    def test_locale_for_locale_object(self):
        obj = SimpleNamespace(locale=SimpleNamespace(code="fr"))

        self.assertEqual(self.connector.locale_for(obj), "fr")

    def test_new_names_take_object_locale(self):
        event = Event.objects.create(name="PyCon", locale="es")

        self.manager.add_categories(event, "topics", ["Verde"])

        self.assertEqual(self.category_set.categories.get(name="Verde").locale, "es")

    def test_existing_names_in_object_locale(self):
        event = Event.objects.create(name="PyCon", locale="es")

        self.manager.add_categories(event, "topics", ["Rojo"])

        self.assertEqual(self.manager.get_many(event, "topics"), [self.rojo])
        self.assertEqual(self.category_set.categories.count(), 3)

    def test_categories_for_set_prefers_locale(self):
        categories = self.connector.categories_for_set(self.category_set, locale="es")

        self.assertEqual(categories, [self.blue, self.rojo])

    def test_categories_for_set_without_locale(self):
        categories = self.connector.categories_for_set(self.category_set)

        self.assertEqual(categories, [self.blue, self.red, self.rojo])

    def test_identifier_is_group(self):
        self.assertEqual(
            self.connector.category_identifier_for_name(self.store, self.category_set, "Rojo"),
            self.red.group_id,
        )

    def test_filter_matches_every_locale_variant(self):
        spanish = Event.objects.create(name="Fiesta", locale="es")
        english = Event.objects.create(name="Party", locale="en")
        other = Event.objects.create(name="Other", locale="en")
        self.manager.add_categories(spanish, "topics", ["Rojo"])
        self.manager.add_categories(english, "topics", ["Red"])
        self.manager.add_categories(other, "topics", ["Green"])

        result = self.manager.filter_by_categories(Event.objects.all(), "topics", "Red")

        self.assertEqual(set(result), {spanish, english})
