import itertools

import pytest
from entity_shapes.core.presence import column_value_type, resolve_column
from entity_shapes.models.computed import OperationMode, Presence, ValueKind
from entity_shapes.models.schema import ColumnDefinition

FLAG_COMBINATIONS = list(itertools.product([False, True], repeat=3))


def _column(has_default, is_generated, is_nullable):
    return ColumnDefinition(
        name="col",
        scalar_type="int",
        has_default=has_default,
        is_generated=is_generated,
        is_nullable=is_nullable,
    )


@pytest.mark.parametrize("mode", [OperationMode.INSERT, OperationMode.CREATE])
@pytest.mark.parametrize("flags", FLAG_COMBINATIONS)
def test_insert_and_create_optional_iff_store_can_supply(mode, flags):
    presence = resolve_column(_column(*flags), mode)
    expected = Presence.OPTIONAL if any(flags) else Presence.REQUIRED
    assert presence is expected


@pytest.mark.parametrize("flags", FLAG_COMBINATIONS)
def test_all_mode_is_always_required(flags):
    assert resolve_column(_column(*flags), OperationMode.ALL) is Presence.REQUIRED


@pytest.mark.parametrize("flags", FLAG_COMBINATIONS)
def test_virtuals_only_lists_generated_columns(flags):
    has_default, is_generated, is_nullable = flags
    presence = resolve_column(_column(*flags), OperationMode.VIRTUALS)
    if is_generated:
        assert presence is Presence.OPTIONAL
    else:
        assert presence is None


def test_merge_is_not_a_projection_mode():
    with pytest.raises(ValueError):
        resolve_column(_column(False, False, False), OperationMode.MERGE)


def test_nullable_shows_in_value_type():
    vt = column_value_type(_column(False, False, True))
    assert vt.kind is ValueKind.SCALAR
    assert vt.scalar_type == "int"
    assert vt.nullable is True
    assert column_value_type(_column(False, False, False)).nullable is False
