"""Tests for half-open conflict detection."""

import random
from datetime import timedelta

import pytest

from agenda.engine.conflicts import find_conflict, has_conflict, intervals_overlap
from agenda.engine.errors import InvalidRequestError
from agenda.schemas.appointment_schema import AppointmentStatus
from tests.conftest import OTHER_PRO, PRO, at, make_appointment


def _brute_force_overlap(a0: int, a1: int, b0: int, b1: int) -> bool:
    return bool(set(range(a0, a1)) & set(range(b0, b1)))


def _three_way_overlap(a0: int, a1: int, b0: int, b1: int) -> bool:
    """Starts during, ends during, or contains the other interval."""
    return (
        (b0 <= a0 < b1)
        or (b0 < a1 <= b1)
        or (a0 <= b0 and a1 >= b1)
    )


class TestIntervalsOverlap:
    def test_randomized_against_brute_force(self):
        rng = random.Random(42)
        for _ in range(2000):
            a0, b0 = rng.randint(0, 200), rng.randint(0, 200)
            a1, b1 = a0 + rng.randint(1, 60), b0 + rng.randint(1, 60)
            expected = _brute_force_overlap(a0, a1, b0, b1)
            assert intervals_overlap(a0, a1, b0, b1) == expected, (a0, a1, b0, b1)
            assert _three_way_overlap(a0, a1, b0, b1) == expected, (a0, a1, b0, b1)

    def test_touching_intervals_do_not_overlap(self):
        assert not intervals_overlap(540, 600, 600, 660)
        assert not intervals_overlap(600, 660, 540, 600)

    def test_works_with_datetimes(self):
        assert intervals_overlap(at("10:00"), at("11:00"), at("10:30"), at("10:45"))


class TestFindConflict:
    def test_empty_snapshot(self):
        assert find_conflict([], PRO, at("10:00"), 30) is None

    def test_exact_overlap(self):
        existing = make_appointment("10:00", 30)
        assert find_conflict([existing], PRO, at("10:00"), 30) == existing

    def test_no_false_conflict_at_end_boundary(self):
        existing = make_appointment("09:30", 30)  # ends 10:00
        assert find_conflict([existing], PRO, at("10:00"), 30) is None

    def test_no_false_conflict_at_start_boundary(self):
        existing = make_appointment("10:00", 30)
        assert find_conflict([existing], PRO, at("09:30"), 30) is None

    def test_candidate_starts_during_existing(self):
        existing = make_appointment("10:00", 60)
        assert find_conflict([existing], PRO, at("10:30"), 60) == existing

    def test_candidate_ends_during_existing(self):
        existing = make_appointment("10:00", 60)
        assert find_conflict([existing], PRO, at("09:30"), 60) == existing

    def test_candidate_contains_existing(self):
        existing = make_appointment("10:15", 15)
        assert find_conflict([existing], PRO, at("10:00"), 60) == existing

    def test_existing_contains_candidate(self):
        existing = make_appointment("10:00", 120)
        assert find_conflict([existing], PRO, at("10:30"), 15) == existing

    def test_cancelled_never_blocks(self):
        cancelled = make_appointment("10:00", 30, status=AppointmentStatus.CANCELLED)
        assert find_conflict([cancelled], PRO, at("10:00"), 30) is None

    @pytest.mark.parametrize("status", [
        AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED, AppointmentStatus.COMPLETED,
    ])
    def test_non_cancelled_statuses_block(self, status):
        existing = make_appointment("10:00", 30, status=status)
        assert find_conflict([existing], PRO, at("10:00"), 30) == existing

    def test_other_professional_never_blocks(self):
        other = make_appointment("10:00", 30, professional_id=OTHER_PRO)
        assert find_conflict([other], PRO, at("10:00"), 30) is None

    def test_excluded_appointment_is_skipped(self):
        existing = make_appointment("10:00", 30, appointment_id="APT-EDIT")
        assert find_conflict([existing], PRO, at("10:15"), 30, exclude_id="APT-EDIT") is None

    def test_exclusion_only_skips_that_id(self):
        editing = make_appointment("10:00", 30, appointment_id="APT-EDIT")
        neighbour = make_appointment("10:30", 30, appointment_id="APT-NEXT")
        found = find_conflict([editing, neighbour], PRO, at("10:15"), 30, exclude_id="APT-EDIT")
        assert found == neighbour

    def test_returns_first_in_iteration_order(self):
        first = make_appointment("10:00", 30, appointment_id="APT-1")
        second = make_appointment("10:30", 30, appointment_id="APT-2")
        assert find_conflict([first, second], PRO, at("10:00"), 60) == first
        assert find_conflict([second, first], PRO, at("10:00"), 60) == second

    def test_accepts_a_generator(self):
        appointments = (make_appointment(f"{h:02d}:00", 30) for h in range(9, 12))
        assert find_conflict(appointments, PRO, at("11:15"), 30) is not None

    @pytest.mark.parametrize("duration", [0, -15])
    def test_non_positive_duration_rejected(self, duration):
        with pytest.raises(InvalidRequestError):
            find_conflict([], PRO, at("10:00"), duration)

    def test_crossing_midnight(self):
        late = make_appointment("23:30", 60)
        next_day = late.start_time + timedelta(minutes=45)
        assert find_conflict([late], PRO, next_day, 30) == late


class TestHasConflict:
    def test_true_and_false(self):
        existing = make_appointment("14:00", 30)
        assert has_conflict([existing], PRO, at("14:15"), 30)
        assert not has_conflict([existing], PRO, at("14:30"), 30)
