import pytest

from apps.categories.connectors import I18nConnector
from apps.categories.exceptions import SetNotFoundError, ValidationError
from apps.categories.selectors import (
    AUTOCOMPLETE,
    CHECKBOX,
    MAX_CATEGORIES_SIMPLE_SELECTOR,
    SELECT,
    selector_mode,
    selector_options,
)
from apps.categories.services import AssociationManager, CategoryStore
from tests.testapp.models import Article, Event


@pytest.mark.parametrize(
    "available,max_selectable,expected",
    [
        (0, 1, SELECT),
        (0, 2, CHECKBOX),
        (0, None, CHECKBOX),
        (1, 1, SELECT),
        (6, 1, SELECT),
        (7, 1, AUTOCOMPLETE),
        (3, None, CHECKBOX),
        (3, 2, CHECKBOX),
        (MAX_CATEGORIES_SIMPLE_SELECTOR + 1, None, AUTOCOMPLETE),
    ],
)
def test_selector_mode(available, max_selectable, expected):
    assert selector_mode(available, max_selectable) == expected


@pytest.mark.django_db
class TestSelectorOptions:

    def test_for_model(self, store, manager):
        cities = store.create_set("Cities", "cities")
        store.add_to_set(cities, ["Paris", "Rome"])

        options = selector_options(Article, "city", manager=manager)

        assert options.mode == SELECT
        assert options.category_set == cities
        assert options.max_selectable == 1
        assert [c.name for c in options.categories] == ["Paris", "Rome"]
        assert options.selected == []

    def test_many_categories_use_autocomplete(self, store, manager):
        tags = store.create_set("Tags", "tags")
        store.add_to_set(tags, [f"tag {n}" for n in range(10)])

        options = selector_options(Article, "tags", manager=manager)

        assert options.mode == AUTOCOMPLETE
        assert len(options.categories) == 10

    def test_selected_categories_of_object(self, store, manager):
        store.create_set("Colors", "colors")
        article = Article.objects.create(title="Hello")
        manager.add_categories(article, "colors", ["red"])

        options = selector_options(article, "colors", manager=manager)

        assert options.mode == CHECKBOX
        assert options.max_selectable == 2
        assert [c.name for c in options.selected] == ["red"]

    def test_forced_mode(self, store, manager):
        store.create_set("Cities", "cities")

        options = selector_options(Article, "city", mode=AUTOCOMPLETE, manager=manager)

        assert options.mode == AUTOCOMPLETE

    def test_unknown_mode(self, store, manager):
        store.create_set("Cities", "cities")

        with pytest.raises(ValidationError):
            selector_options(Article, "city", mode="radio", manager=manager)

    def test_missing_set(self, manager):
        with pytest.raises(SetNotFoundError):
            selector_options(Article, "city", manager=manager)

    def test_object_locale_picks_variants(self):
        store = CategoryStore(connector=I18nConnector())
        manager = AssociationManager(store=store)
        topics = store.create_set("Topics", "topics")
        red = store.create_category(topics, "Red", locale="en")
        rojo = store.create_translation(red, "Rojo", "es")
        event = Event.objects.create(name="Fiesta", locale="es")

        options = selector_options(event, "topics", manager=manager)

        assert options.categories == [rojo]
        assert selector_options(event, "topics", locale="en", manager=manager).categories == [red]
