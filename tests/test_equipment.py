from __future__ import annotations

import pytest

from ordeal.domain.equipment import (
    EquipmentChanges,
    apply_equipment_changes,
    consume_one,
    convert,
    find_item,
    has_capability,
    make_item,
    total_volume,
)


def test_consume_one_decrements_stack() -> None:
    bandages = make_item("Bandages", quantity=2)
    equipment = apply_equipment_changes((bandages,), consume_one(bandages))
    assert len(equipment) == 1
    assert equipment[0].quantity == 1


def test_consume_one_removes_last_unit() -> None:
    whistle = make_item("Whistle")
    assert apply_equipment_changes((whistle,), consume_one(whistle)) == ()


def test_added_items_merge_into_existing_stack() -> None:
    logs = make_item("Fuel logs", quantity=1)
    changes = EquipmentChanges(added=(make_item("Fuel logs", quantity=2),))
    equipment = apply_equipment_changes((logs,), changes)
    assert [(item.name, item.quantity) for item in equipment] == [("Fuel logs", 3)]


def test_convert_swaps_one_unit_for_new_item() -> None:
    untreated = make_item("Water bottle (untreated)")
    equipment = apply_equipment_changes((untreated,), convert(untreated, "Water bottle (clean)"))
    assert [item.name for item in equipment] == ["Water bottle (clean)"]
    assert has_capability(equipment, "clean_water")
    assert not has_capability(equipment, "untreated_water")


def test_capabilities_ignore_empty_stacks() -> None:
    empty = make_item("Matches", quantity=0)
    assert find_item((empty,), "fire_starter") is None


def test_unknown_catalog_item_raises() -> None:
    with pytest.raises(KeyError):
        make_item("Jetpack")


def test_total_volume_sums_known_items() -> None:
    equipment = (make_item("Knife"), make_item("Rope (10ft)"))
    assert total_volume(equipment) == pytest.approx(1.4)


def test_no_changes_keeps_equipment() -> None:
    knife = make_item("Knife")
    assert apply_equipment_changes((knife,), None) == (knife,)
