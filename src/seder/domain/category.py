"""Category domain service and display metadata lookup."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from seder.database.base import Database
from seder.domain.entities import Category
from seder.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    category_in_use,
    category_name_not_found,
    category_not_found,
    duplicate_category_name,
)

logger = logging.getLogger(__name__)


class MetaSource(Enum):
    """Where a category's display metadata came from."""

    CATEGORY = "category"
    LEGACY = "legacy"
    DEFAULT = "default"


@dataclass(frozen=True)
class CategoryMeta:
    """Display metadata for an entry's category."""

    name: str
    color: str
    icon: str
    is_archived: bool
    source: MetaSource


# Free-text categories from before categories became records
LEGACY_CATEGORY_META: dict[str, tuple[str, str]] = {
    "הופעות": ("emerald", "Sparkles"),
    "הפקה": ("indigo", "SlidersHorizontal"),
    "הקלטות": ("sky", "Mic2"),
    "הוראה": ("amber", "BookOpen"),
    "עיבודים": ("purple", "Layers"),
    "אחר": ("slate", "Circle"),
    "אולפן": ("blue", "SlidersHorizontal"),
}

# Categories a new database starts with, in display order
DEFAULT_CATEGORY_NAMES = ("הופעות", "הפקה", "הקלטות", "הוראה", "עיבודים", "אחר")

NO_CATEGORY_META = CategoryMeta(
    name="-", color="slate", icon="Circle", is_archived=False, source=MetaSource.DEFAULT
)


def resolve_category_meta(
    category: Optional[Category] = None, legacy_category: Optional[str] = None
) -> CategoryMeta:
    """Pick display metadata from a category record, the legacy table, or the default."""
    if category is not None:
        return CategoryMeta(
            name=category.name,
            color=category.color,
            icon=category.icon,
            is_archived=category.is_archived,
            source=MetaSource.CATEGORY,
        )

    if legacy_category and legacy_category in LEGACY_CATEGORY_META:
        color, icon = LEGACY_CATEGORY_META[legacy_category]
        return CategoryMeta(
            name=legacy_category,
            color=color,
            icon=icon,
            is_archived=False,
            source=MetaSource.LEGACY,
        )

    return NO_CATEGORY_META


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(self, name: str, color: str = "slate", icon: str = "Circle") -> int:
        """Create a category at the end of the display order.

        Args:
            name: Category name (unique)
            color: Color scheme name
            icon: Icon name

        Returns:
            Category ID

        Raises:
            ConflictError: If a category with this name exists
        """
        name = name.strip()
        if self.db.get_category_by_name(name) is not None:
            raise ConflictError(duplicate_category_name(name))

        display_order = self.db.get_max_category_display_order() + 1
        category_id = self.db.create_category(
            name=name, color=color, icon=icon, display_order=display_order
        )
        logger.info("Created category %s (%s)", category_id, name)
        return category_id

    def get_category(self, category_id: int) -> Optional[Category]:
        return self.db.get_category(category_id)

    def require_category_by_name(self, name: str) -> Category:
        """Get a category by name or raise NotFoundError."""
        category = self.db.get_category_by_name(name)
        if category is None:
            raise NotFoundError(category_name_not_found(name))
        return category

    def list_categories(self, include_archived: bool = False) -> list[Category]:
        """List categories ordered by display order, then name."""
        return self.db.list_categories(include_archived=include_archived)

    def update_category(
        self,
        category_id: int,
        name: Optional[str] = None,
        color: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> None:
        """Update category fields.

        Raises:
            NotFoundError: If the category doesn't exist
            ConflictError: If the new name belongs to another category
        """
        self._require(category_id)
        if name is not None:
            name = name.strip()
            existing = self.db.get_category_by_name(name)
            if existing is not None and existing.id != category_id:
                raise ConflictError(duplicate_category_name(name))

        self.db.update_category(category_id, name=name, color=color, icon=icon)

    def reorder_categories(self, orders: dict[int, int]) -> None:
        """Apply new display orders, all or nothing."""
        with self.db.atomic():
            for category_id, display_order in orders.items():
                self.db.set_category_display_order(category_id, display_order)

    def seed_default_categories(self) -> list[int]:
        """Create the default categories if there are no categories yet.

        Archived categories count as existing.

        Returns:
            IDs of the created categories, empty if nothing was seeded
        """
        if self.db.list_categories(include_archived=True):
            return []

        category_ids = []
        with self.db.atomic():
            for display_order, name in enumerate(DEFAULT_CATEGORY_NAMES, start=1):
                color, icon = LEGACY_CATEGORY_META[name]
                category_ids.append(
                    self.db.create_category(
                        name=name, color=color, icon=icon, display_order=display_order
                    )
                )
        logger.info("Seeded %d default categories", len(category_ids))
        return category_ids

    def archive_category(self, category_id: int) -> None:
        """Archive a category; entries keep pointing at it."""
        self._require(category_id)
        self.db.set_category_archived(category_id, True)
        logger.info("Archived category %s", category_id)

    def unarchive_category(self, category_id: int) -> None:
        self._require(category_id)
        self.db.set_category_archived(category_id, False)

    def delete_category(self, category_id: int) -> None:
        """Delete a category that no income entry uses.

        Raises:
            NotFoundError: If the category doesn't exist
            DependencyError: If income entries still reference it
        """
        self._require(category_id)
        entry_count = self.db.count_entries_for_category(category_id)
        if entry_count > 0:
            raise DependencyError(category_in_use(category_id, entry_count))
        self.db.delete_category(category_id)
        logger.info("Deleted category %s", category_id)

    def _require(self, category_id: int) -> Category:
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category
