"""Tests for the ordered stage tracks shared by cases and journeys."""
from datetime import datetime, timezone

import pytest

from surrogacy_admin.db.enums import CaseStage, JourneyStatus
from surrogacy_admin.services.stage_progression import (
    CASE_TRACK,
    JOURNEY_TRACK,
    StageTrack,
    StageTransitionError,
    UnknownStageError,
    completed_at_map,
)


def test_case_track_order():
    assert CASE_TRACK.stages == (
        "Matching", "Screening", "Medical", "Legal", "Pregnancy", "Completed",
    )
    assert CASE_TRACK.first == CaseStage.MATCHING.value
    assert CASE_TRACK.last == CaseStage.COMPLETED.value


def test_journey_track_excludes_cancelled():
    assert JourneyStatus.CANCELLED.value not in JOURNEY_TRACK.stages
    assert JOURNEY_TRACK.is_terminal("Cancelled")
    assert JOURNEY_TRACK.first == "Medical Screening"
    assert JOURNEY_TRACK.last == "Completed"


@pytest.mark.parametrize("track", [CASE_TRACK, JOURNEY_TRACK])
def test_next_stage_follows_index(track):
    for position, stage in enumerate(track.stages[:-1]):
        assert track.next_stage(stage) == track.stages[position + 1]
    assert track.next_stage(track.last) is None


def test_progress_percent():
    assert CASE_TRACK.progress_percent("Matching") == pytest.approx(16.67)
    assert CASE_TRACK.progress_percent("Completed") == 100
    assert JOURNEY_TRACK.progress_percent("Cancelled") is None


def test_unknown_stage_raises():
    with pytest.raises(UnknownStageError):
        CASE_TRACK.index("Shipping")
    # UnknownStageError is a ValueError so routers map it to 400
    with pytest.raises(ValueError):
        CASE_TRACK.next_stage("Shipping")


def test_forward_jump_allowed():
    CASE_TRACK.validate_transition("Matching", "Legal")


@pytest.mark.parametrize("target", ["Matching", "Screening"])
def test_backward_and_same_stage_rejected(target):
    with pytest.raises(StageTransitionError):
        CASE_TRACK.validate_transition("Screening", target)


def test_cancel_rules():
    JOURNEY_TRACK.validate_transition("Pregnancy", "Cancelled")
    with pytest.raises(StageTransitionError):
        JOURNEY_TRACK.validate_transition("Completed", "Cancelled")
    with pytest.raises(StageTransitionError):
        JOURNEY_TRACK.validate_transition("Cancelled", "Legal")


def test_timeline_marks_current():
    stamp = datetime(2026, 1, 5, tzinfo=timezone.utc)
    entries = CASE_TRACK.timeline("Medical", {"Matching": stamp})
    assert [e.status for e in entries] == [
        "completed", "completed", "current", "upcoming", "upcoming", "upcoming",
    ]
    assert entries[0].completed_at == stamp
    assert entries[1].completed_at is None


def test_timeline_final_stage_is_completed():
    entries = CASE_TRACK.timeline("Completed")
    assert all(e.status == "completed" for e in entries)


def test_timeline_terminal_has_no_current():
    stamp = datetime(2026, 2, 1, tzinfo=timezone.utc)
    entries = JOURNEY_TRACK.timeline("Cancelled", {"Medical Screening": stamp})
    assert "current" not in {e.status for e in entries}
    assert entries[0].status == "cancelled"
    assert entries[0].completed_at == stamp
    assert entries[1].status == "upcoming"


def test_timeline_terminal_marks_abandoned_stage():
    first = datetime(2026, 2, 1, tzinfo=timezone.utc)
    second = datetime(2026, 3, 1, tzinfo=timezone.utc)
    entries = JOURNEY_TRACK.timeline(
        "Cancelled", {"Medical Screening": first, "Legal": second}
    )
    assert [e.status for e in entries] == [
        "completed", "cancelled", "upcoming", "upcoming", "upcoming", "upcoming",
    ]


def test_timeline_terminal_without_history():
    entries = JOURNEY_TRACK.timeline("Cancelled")
    assert all(e.status == "upcoming" for e in entries)


def test_track_rejects_duplicates():
    with pytest.raises(ValueError):
        StageTrack(name="bad", stages=("a", "a"))


def test_completed_at_map_keeps_latest():
    class Row:
        def __init__(self, stage, at):
            self.stage = stage
            self.completed_at = at

    first = datetime(2026, 1, 1, tzinfo=timezone.utc)
    second = datetime(2026, 1, 2, tzinfo=timezone.utc)
    result = completed_at_map([Row("Legal", first), Row("Legal", second)])
    assert result == {"Legal": second}
