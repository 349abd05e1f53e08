"""Category records and category-name resolution."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..config import CATEGORIES_TABLE
from ..errors import CategoryNotFoundError
from ..models import Category
from .base import EntityService, where

logger = logging.getLogger(__name__)


class CategoryService(EntityService[Category]):
    table = CATEGORIES_TABLE
    label = "category"
    fields = ("Name", "color_c", "icon_c", "isCustom_c")

    def to_domain(self, record: Dict[str, Any]) -> Category:
        return Category(
            id=record.get("Id"),
            name=record.get("Name") or "",
            color=record.get("color_c") or "",
            icon=record.get("icon_c") or "",
            is_custom=bool(record.get("isCustom_c")),
        )

    def to_wire(self, category: Category) -> Dict[str, Any]:
        return {
            "Name": category.name.strip(),
            "color_c": category.color or None,
            "icon_c": category.icon or None,
            "isCustom_c": category.is_custom,
        }

    def get_by_name(self, name: str) -> Optional[Category]:
        matches = self._query(where=[where("Name", "EqualTo", name)])
        return matches[0] if matches else None

    def create(self, category: Category) -> Category:
        category.is_custom = True
        return self.to_domain(self._create(self.to_wire(category)))

    def update(self, record_id: int, category: Category) -> Category:
        return self.to_domain(self._update(record_id, self.to_wire(category)))


class CategoryResolver:
    """Turns a category name into the category id stored on budgets and transactions."""

    def __init__(self, categories: CategoryService):
        self.categories = categories

    def resolve(self, name: Optional[str]) -> int:
        cleaned = (name or "").strip()
        if not cleaned:
            raise CategoryNotFoundError(cleaned)
        category = self.categories.get_by_name(cleaned)
        if category is None or category.id is None:
            logger.warning("Category %r not found", cleaned)
            raise CategoryNotFoundError(cleaned)
        return int(category.id)
