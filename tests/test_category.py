"""Tests for categories and category display metadata."""

from datetime import date

import pytest

from seder.domain.category import (
    DEFAULT_CATEGORY_NAMES,
    NO_CATEGORY_META,
    MetaSource,
    resolve_category_meta,
)
from seder.domain.entities import Category
from seder.domain.errors import ConflictError, DependencyError, NotFoundError


def test_create_category(category_service):
    category_id = category_service.create_category("Gigs", color="emerald", icon="Sparkles")
    category = category_service.get_category(category_id)

    assert category.name == "Gigs"
    assert category.color == "emerald"
    assert category.icon == "Sparkles"
    assert category.display_order == 1


def test_duplicate_category(category_service):
    category_service.create_category("Gigs")
    with pytest.raises(ConflictError):
        category_service.create_category("Gigs")


def test_list_and_archive(category_service):
    gigs = category_service.create_category("Gigs")
    category_service.create_category("Teaching")

    category_service.archive_category(gigs)

    assert [c.name for c in category_service.list_categories()] == ["Teaching"]
    assert [c.name for c in category_service.list_categories(include_archived=True)] == ["Gigs", "Teaching"]

    category_service.unarchive_category(gigs)
    assert len(category_service.list_categories()) == 2


def test_archive_missing_category(category_service):
    with pytest.raises(NotFoundError, match="Category 7 not found"):
        category_service.archive_category(7)


def test_require_category_by_name(category_service):
    category_service.create_category("Gigs")
    assert category_service.require_category_by_name("Gigs").name == "Gigs"
    with pytest.raises(NotFoundError):
        category_service.require_category_by_name("Other")


def test_delete_unused_category(category_service):
    gigs = category_service.create_category("Gigs")

    category_service.delete_category(gigs)

    assert category_service.get_category(gigs) is None


def test_delete_category_in_use(category_service, income_service):
    gigs = category_service.create_category("Gigs")
    income_service.create_entry(date=date(2024, 6, 1), amount_gross="100", category_name="Gigs")

    with pytest.raises(DependencyError, match="used by 1 income entry"):
        category_service.delete_category(gigs)
    assert category_service.get_category(gigs) is not None


def test_delete_missing_category(category_service):
    with pytest.raises(NotFoundError):
        category_service.delete_category(3)


def test_update_category(category_service):
    gigs = category_service.create_category("Gigs", color="emerald", icon="Sparkles")

    category_service.update_category(gigs, name=" Live gigs ", icon="Mic2")

    category = category_service.get_category(gigs)
    assert category.name == "Live gigs"
    assert category.color == "emerald"
    assert category.icon == "Mic2"


def test_update_category_keeps_own_name(category_service):
    gigs = category_service.create_category("Gigs")

    category_service.update_category(gigs, name="Gigs", color="sky")

    assert category_service.get_category(gigs).color == "sky"


def test_update_category_name_conflict(category_service):
    category_service.create_category("Gigs")
    teaching = category_service.create_category("Teaching")

    with pytest.raises(ConflictError):
        category_service.update_category(teaching, name="Gigs")
    assert category_service.get_category(teaching).name == "Teaching"


def test_update_missing_category(category_service):
    with pytest.raises(NotFoundError):
        category_service.update_category(5, name="Gigs")


def test_reorder_categories(category_service):
    gigs = category_service.create_category("Gigs")
    teaching = category_service.create_category("Teaching")
    mixing = category_service.create_category("Mixing")

    category_service.reorder_categories({mixing: 1, gigs: 2, teaching: 3})

    assert [c.name for c in category_service.list_categories()] == ["Mixing", "Gigs", "Teaching"]


def test_reorder_with_missing_category_changes_nothing(category_service):
    gigs = category_service.create_category("Gigs")
    teaching = category_service.create_category("Teaching")

    with pytest.raises(NotFoundError):
        category_service.reorder_categories({teaching: 1, gigs: 2, 99: 3})

    assert [c.name for c in category_service.list_categories()] == ["Gigs", "Teaching"]


def test_seed_default_categories(category_service):
    created = category_service.seed_default_categories()

    categories = category_service.list_categories()
    assert len(created) == 6
    assert tuple(c.name for c in categories) == DEFAULT_CATEGORY_NAMES
    assert [c.display_order for c in categories] == [1, 2, 3, 4, 5, 6]
    assert (categories[0].color, categories[0].icon) == ("emerald", "Sparkles")


def test_seed_is_skipped_when_categories_exist(category_service):
    gigs = category_service.create_category("Gigs")
    category_service.archive_category(gigs)

    assert category_service.seed_default_categories() == []
    assert category_service.list_categories(include_archived=True)[0].name == "Gigs"


def test_seed_twice_creates_once(category_service):
    category_service.seed_default_categories()

    assert category_service.seed_default_categories() == []
    assert len(category_service.list_categories()) == 6


class TestCategoryMeta:
    """Tests for resolving category display metadata."""

    def test_category_record_wins(self):
        category = Category(id=1, name="Gigs", color="emerald", icon="Sparkles", is_archived=True)
        meta = resolve_category_meta(category, legacy_category="הוראה")

        assert meta.source == MetaSource.CATEGORY
        assert meta.name == "Gigs"
        assert meta.is_archived

    def test_legacy_name_lookup(self):
        meta = resolve_category_meta(legacy_category="הוראה")

        assert meta.source == MetaSource.LEGACY
        assert (meta.color, meta.icon) == ("amber", "BookOpen")

    def test_unknown_legacy_name_gets_default(self):
        assert resolve_category_meta(legacy_category="Something") == NO_CATEGORY_META
        assert resolve_category_meta() == NO_CATEGORY_META
