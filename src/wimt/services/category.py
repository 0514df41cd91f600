"""CategoryService: create, list and rename categories."""

from __future__ import annotations

from wimt.domain.category import Category, CategoryName, Color, Icon
from wimt.domain.errors import DomainError
from wimt.domain.specifications import category_name_matches
from wimt.services.base import BaseService
from wimt.services.result import ServiceResult


class CategoryService(BaseService):
    """Handles category CRUD against the tracker's repositories."""

    async def create(
        self,
        name: str,
        *,
        color: str | None = None,
        icon: str | None = None,
    ) -> ServiceResult:
        op = "category_create"
        try:
            category = Category(
                name=CategoryName.create(name),
                created_at=self._tracker.clock.now(),
                color=Color.create(color) if color is not None else None,
                icon=Icon.create(icon) if icon is not None else None,
            )
        except DomainError as exc:
            return self._from_domain_error(op, exc)

        self._tracker.categories.save(category)
        await self._publish(category.pull_domain_events())
        return ServiceResult.success(op, category.to_dict())

    async def rename(self, category_id: str, name: str) -> ServiceResult:
        op = "category_rename"
        category = self._tracker.categories.find_by_id(category_id)
        if category is None:
            return self._fail(op, "NOT_FOUND", f"Category not found: {category_id}", id=category_id)
        try:
            category.rename(CategoryName.create(name), at=self._tracker.clock.now())
        except DomainError as exc:
            return self._from_domain_error(op, exc)

        self._tracker.categories.save(category)
        await self._publish(category.pull_domain_events())
        return ServiceResult.success(op, category.to_dict())

    def list_categories(self, *, search: str | None = None) -> ServiceResult:
        """All categories, oldest first; *search* is a case-insensitive substring."""
        op = "category_list"
        repo = self._tracker.categories
        if search:
            found = repo.find_many_by_spec(category_name_matches(search))
        else:
            found = repo.find_all()
        found.sort(key=lambda c: c.created_at.value)
        items = [c.to_dict() for c in found]
        return ServiceResult.success(op, {"items": items, "count": len(items)})
