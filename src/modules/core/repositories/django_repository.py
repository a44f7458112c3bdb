"""Helpers shared by the Django ORM repositories."""

from __future__ import annotations

from typing import Callable, TypeVar

import structlog
from django.db import IntegrityError, models, transaction

from modules.core.exceptions import StorageConflict

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=models.Model)


def save_or_conflict(entity: M, write: Callable[[M], None] | None = None) -> M:
    """Run *write* (default ``entity.save()``) in a savepoint.

    A database integrity error is re-raised as ``StorageConflict`` so the
    enclosing service transaction rolls back as a conflict, not as a
    server error.
    """
    try:
        with transaction.atomic():
            if write is None:
                entity.save()
            else:
                write(entity)
    except IntegrityError as exc:
        logger.warning(
            "storage.integrity_error",
            model=entity._meta.label,
            error=str(exc),
        )
        raise StorageConflict("Unique index or primary key violation.") from exc
    return entity
