from typing import Any, Dict, List, Mapping, Optional, Sequence, Type
from django.db.models import Model, Q, QuerySet


class DB_Accessor:
    """Generic data accessor to wrap basic queryset operations."""

    def __init__(self, model: Type[Model]) -> None:
        self.model = model

    def list(
        self,
        *,
        filters: Optional[Mapping[str, Any]] = None,
        where: Optional[Q] = None,
        order_by: Sequence[str] = (),
        related: Sequence[str] = (),
        as_dict: bool = False,
    ) -> QuerySet | List[Dict[str, Any]]:
        """Return a filtered queryset (or list of dicts)."""
        qs: QuerySet = self.model.objects.filter(**(filters or {}))
        if where is not None:
            qs = qs.filter(where)
        if related:
            qs = qs.select_related(*related)
        qs = self._apply_ordering(qs, order_by)
        return list(qs.values()) if as_dict else qs

    def _apply_ordering(self, qs: QuerySet, order_by: Sequence[str]) -> QuerySet:
        return qs.order_by(*order_by) if order_by else qs

    def first(self, **lookup: Any) -> Optional[Model]:
        """Fetch the object matching the lookup, or None."""
        return self.model.objects.filter(**lookup).first()

    def delete(self, **lookup: Any) -> int:
        """Delete objects matching lookup; return count deleted."""
        count, _ = self.model.objects.filter(**lookup).delete()
        return count
