"""Repository helpers for fetching posts."""

from typing import Optional, Sequence

from django.db.models import Q, QuerySet

from community.db_accessor import DB_Accessor
from community.models import Post

SORT_OPTIONS = {
    "newest": ("-is_pinned", "-created_at"),
    "oldest": ("-is_pinned", "created_at"),
    "popular": ("-is_pinned", "-like_count", "-created_at"),
    "discussed": ("-is_pinned", "-comment_count", "-created_at"),
}


class PostRepo(DB_Accessor):
    """Repository for Post queries (feed, author-specific, moderation queue)."""

    def __init__(self) -> None:
        super().__init__(Post)

    def list_for_feed(
        self,
        *,
        college: Optional[str] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
        sort: str = "newest",
    ) -> QuerySet:
        """Return active posts with optional college/category/search filters."""
        filters = {"is_active": True}
        if college:
            filters["college"] = college
        if category and category.lower() != "all":
            filters["category__iexact"] = category

        where = None
        if search:
            where = Q(title__icontains=search) | Q(content__icontains=search)

        return self.list(
            filters=filters,
            where=where,
            order_by=SORT_OPTIONS.get(sort, SORT_OPTIONS["newest"]),
            related=("author",),
        )

    def list_for_author(self, author_id: int, order_by: Sequence[str] = ("-created_at",)) -> QuerySet:
        """Return an author's active posts in every moderation state."""
        return self.list(
            filters={"author_id": author_id, "is_active": True},
            order_by=order_by,
            related=("author",),
        )

    def list_by_status(self, status: Optional[str] = None) -> QuerySet:
        """Moderation queue: every post, optionally narrowed to one status."""
        filters = {"moderation_status": status} if status else None
        return self.list(filters=filters, order_by=("-created_at",), related=("author", "moderated_by"))
