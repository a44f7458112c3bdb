"""Base abstract models and the visibility rule shared by every aggregate.

Provides:
- ``BaseModel``: integer surrogate key and the visibility hooks.
- ``SoftDeleteModel``: extends BaseModel with a ``deleted`` flag and a
  ``created_at`` stamp.
- ``is_visible``: the in-memory form of the visibility rule.

Visibility is declared once per model, in two faces kept side by side:
``visible_condition()`` (a ``Q`` used by ``objects.alive()``) and the
``is_visible`` property (used when filtering already loaded associations).
``objects`` returns ALL rows; call ``.alive()`` explicitly to hide
soft-deleted ones.
"""

from __future__ import annotations

from typing import Any

from django.db import models
from django.db.models import Q

# ---------------------------------------------------------------------------
# Visibility infrastructure
# ---------------------------------------------------------------------------


class VisibilityQuerySet(models.QuerySet):
    """QuerySet filtered by the model's ``visible_condition()``."""

    def alive(self) -> VisibilityQuerySet:
        """Return only visible records."""
        return self.filter(self.model.visible_condition())


class VisibilityManager(models.Manager.from_queryset(VisibilityQuerySet)):
    """Manager exposing ``.alive()``."""


class BaseModel(models.Model):
    """Abstract base with an auto-increment PK and the visibility hooks.

    Equality is Django's: by primary key, and unsaved instances are only
    equal to themselves.
    """

    objects = VisibilityManager()

    class Meta:
        abstract = True

    @classmethod
    def visible_condition(cls) -> Q:
        """Query-side visibility rule. Every row is visible by default."""
        return Q()

    @property
    def is_visible(self) -> bool:
        """Instance-side visibility rule; must agree with ``visible_condition``."""
        return True


# ---------------------------------------------------------------------------
# Soft delete
# ---------------------------------------------------------------------------


class SoftDeleteModel(BaseModel):
    """Abstract model soft-deleted through a boolean ``deleted`` flag.

    - ``created_at`` is stamped on insert and never rewritten.
    - ``delete()`` flips the flag; rows are never removed physically.
    """

    deleted = models.BooleanField(default=False, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True, editable=False)

    class Meta:
        abstract = True

    @classmethod
    def visible_condition(cls) -> Q:
        return Q(deleted=False)

    @property
    def is_visible(self) -> bool:
        return not self.deleted

    def delete(self, using: Any = None, keep_parents: bool = False) -> tuple[int, dict[str, int]]:
        """Soft-delete this instance (no-op if already deleted)."""
        if self.deleted:
            return 0, {}
        self.deleted = True
        self.save(update_fields=["deleted"])
        return 1, {self._meta.label: 1}


def is_visible(entity: BaseModel | None) -> bool:
    """Return ``True`` when *entity* exists and is not soft-deleted."""
    return entity is not None and entity.is_visible
