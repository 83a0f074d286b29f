"""Tests for greedy nearest-centroid identity assignment."""

from __future__ import annotations

import pytest

from contracts import BoundingBox
from track.assigner import IdentityAssigner
from track.registry import IdentityRegistry


def _box_at(cx: float, cy: float, size: float = 10.0) -> BoundingBox:
    return BoundingBox(x=cx - size / 2.0, y=cy - size / 2.0, width=size, height=size)


def test_first_frame_assigns_sequential_ids_in_input_order() -> None:
    detections = [_box_at(10, 10), _box_at(300, 40), _box_at(150, 200)]

    entries = IdentityAssigner().assign(detections, {})

    assert sorted(entries) == [0, 1, 2]
    assert entries[0] == detections[0]
    assert entries[1] == detections[1]
    assert entries[2] == detections[2]


def test_ids_follow_nearest_centroid_regardless_of_input_order() -> None:
    existing = {0: _box_at(5, 5), 1: _box_at(105, 105)}
    near_one = _box_at(103, 108)
    near_zero = _box_at(8, 2)

    entries = IdentityAssigner().assign([near_one, near_zero], existing)

    assert entries == {0: near_zero, 1: near_one}


def test_unmatched_detection_gets_next_id() -> None:
    existing = {0: _box_at(5, 5), 1: _box_at(105, 105)}
    detections = [_box_at(7, 6), _box_at(400, 400), _box_at(104, 101)]

    entries = IdentityAssigner().assign(detections, existing)

    assert sorted(entries) == [0, 1, 2]
    assert entries[2] == detections[1]


def test_new_ids_count_up_from_largest_id_in_use() -> None:
    existing = {0: _box_at(5, 5), 5: _box_at(200, 200)}
    detections = [_box_at(6, 6), _box_at(201, 199), _box_at(500, 10), _box_at(10, 500)]

    entries = IdentityAssigner().assign(detections, existing)

    assert entries[6] == detections[2]
    assert entries[7] == detections[3]


def test_matching_is_one_to_one() -> None:
    existing = {0: _box_at(5, 5), 1: _box_at(200, 200)}
    # Both detections are closer to ID 0 than to ID 1
    detections = [_box_at(6, 6), _box_at(9, 9)]

    entries = IdentityAssigner().assign(detections, existing)

    assert sorted(entries) == [0, 1]
    assert entries[0] == detections[0]
    assert entries[1] == detections[1]


def test_equal_distance_prefers_lower_object_id() -> None:
    existing = {0: _box_at(5, 5), 1: _box_at(25, 5)}
    detection = _box_at(15, 5)

    entries = IdentityAssigner().assign([detection], existing)

    assert entries[0] == detection
    assert entries[1] == existing[1]


def test_equal_distance_prefers_earlier_detection() -> None:
    existing = {0: _box_at(15, 5)}
    left = _box_at(5, 5)
    right = _box_at(25, 5)

    entries = IdentityAssigner().assign([left, right], existing)

    assert entries == {0: left, 1: right}


def test_empty_detections_leave_mapping_unchanged() -> None:
    existing = {0: _box_at(5, 5), 3: _box_at(50, 50)}

    entries = IdentityAssigner().assign([], existing)

    assert entries == existing


def test_unmatched_ids_carry_their_stale_box_forward() -> None:
    existing = {0: _box_at(5, 5), 1: _box_at(105, 105)}
    moved = _box_at(9, 4)

    entries = IdentityAssigner().assign([moved], existing)

    assert entries == {0: moved, 1: existing[1]}


def test_assign_does_not_mutate_input_mapping() -> None:
    existing = {0: _box_at(5, 5)}
    original = dict(existing)

    IdentityAssigner().assign([_box_at(6, 6), _box_at(80, 80)], existing)

    assert existing == original


def test_ids_stay_stable_over_a_moving_sequence() -> None:
    assigner = IdentityAssigner()
    registry = IdentityRegistry()
    for step in range(10):
        detections = [_box_at(400 - step * 5, 100), _box_at(20 + step * 5, 100)]
        assigner.update(detections, registry)
        assert registry.get(0).centroid == pytest.approx((400 - step * 5, 100))
        assert registry.get(1).centroid == pytest.approx((20 + step * 5, 100))
    assert registry.ids() == [0, 1]


def test_distance_gate_opens_new_id_for_far_detection() -> None:
    existing = {0: _box_at(5, 5)}
    far = _box_at(505, 5)

    entries = IdentityAssigner(max_match_distance_px=50.0).assign([far], existing)

    assert entries == {0: existing[0], 1: far}


def test_update_reports_matched_and_new_ids() -> None:
    registry = IdentityRegistry({0: _box_at(5, 5)})

    result = IdentityAssigner().update([_box_at(6, 6), _box_at(300, 300)], registry)

    assert result.matched_ids == (0,)
    assert result.new_ids == (1,)
    assert result.evicted_ids == ()
    assert result.entries == registry.snapshot()
    assert registry.version == 1


def test_update_evicts_after_max_misses() -> None:
    assigner = IdentityAssigner(max_misses=1)
    registry = IdentityRegistry()
    assigner.update([_box_at(5, 5), _box_at(300, 300)], registry)

    first = assigner.update([_box_at(6, 6)], registry)
    assert first.evicted_ids == ()
    assert registry.misses(1) == 1

    second = assigner.update([_box_at(7, 7)], registry)
    assert second.evicted_ids == (1,)
    assert 1 not in registry
    assert registry.ids() == [0]


def test_match_resets_miss_count() -> None:
    assigner = IdentityAssigner(max_misses=2)
    registry = IdentityRegistry()
    assigner.update([_box_at(5, 5)], registry)
    assigner.update([], registry)
    assert registry.misses(0) == 1

    assigner.update([_box_at(6, 5)], registry)

    assert registry.misses(0) == 0


def test_stale_entries_kept_without_miss_limit() -> None:
    assigner = IdentityAssigner()
    registry = IdentityRegistry({0: _box_at(5, 5)})

    for _ in range(50):
        assigner.update([], registry)

    assert registry.ids() == [0]
    assert registry.misses(0) == 50


@pytest.mark.parametrize("kwargs", [{"max_misses": -1}, {"max_match_distance_px": 0.0}])
def test_invalid_assigner_settings_rejected(kwargs) -> None:
    with pytest.raises(ValueError):
        IdentityAssigner(**kwargs)
