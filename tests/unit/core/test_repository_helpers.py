"""Unit tests for ``save_or_conflict``."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from django.db import IntegrityError

from modules.core.exceptions import StorageConflict
from modules.core.repositories.django_repository import save_or_conflict

pytestmark = pytest.mark.unit


class TestSaveOrConflict:
    def test_calls_save_by_default(self):
        entity = MagicMock()
        assert save_or_conflict(entity) is entity
        entity.save.assert_called_once_with()

    def test_uses_custom_writer(self):
        entity = MagicMock()
        writer = MagicMock()
        save_or_conflict(entity, write=writer)
        writer.assert_called_once_with(entity)
        entity.save.assert_not_called()

    def test_integrity_error_becomes_storage_conflict(self):
        entity = MagicMock()
        entity.save.side_effect = IntegrityError("duplicate key")
        with pytest.raises(StorageConflict, match="Unique index or primary key violation"):
            save_or_conflict(entity)

    def test_other_errors_propagate(self):
        entity = MagicMock()
        entity.save.side_effect = ValueError("bad value")
        with pytest.raises(ValueError):
            save_or_conflict(entity)
