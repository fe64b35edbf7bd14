"""Stage progression shared by cases and journeys.

A StageTrack is an immutable ordered list of stages. Records only ever move
forward along their track; every move appends one history row recording the
stage that was left, who left it and when.

apply_transition is the single write path. It issues a conditional UPDATE
guarded on the stage the caller observed, so two concurrent progressions of
the same record cannot both succeed: the loser gets StageConflictError and
no duplicate history row is written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import Session

from surrogacy_admin.db.base import utcnow
from surrogacy_admin.db.enums import CaseStage, JourneyStatus

logger = logging.getLogger(__name__)

TimelineStatus = Literal["completed", "current", "upcoming", "cancelled"]


# =============================================================================
# Errors
# =============================================================================

class UnknownStageError(ValueError):
    """Stage name is not part of the track."""


class StageTransitionError(ValueError):
    """Requested move is not allowed (backwards, same stage, already final)."""


class StageConflictError(StageTransitionError):
    """Record changed stage between read and write."""


# =============================================================================
# Tracks
# =============================================================================

@dataclass(frozen=True)
class TimelineEntry:
    stage: str
    status: TimelineStatus
    completed_at: datetime | None = None


@dataclass(frozen=True)
class StageTrack:
    """Ordered stage list with optional terminal (off-track) stages."""

    name: str
    stages: tuple[str, ...]
    terminal_stages: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.stages:
            raise ValueError(f"Track '{self.name}' has no stages")
        if len(set(self.stages)) != len(self.stages):
            raise ValueError(f"Track '{self.name}' has duplicate stages")

    @property
    def first(self) -> str:
        return self.stages[0]

    @property
    def last(self) -> str:
        return self.stages[-1]

    def contains(self, stage: str) -> bool:
        return stage in self.stages or stage in self.terminal_stages

    def is_terminal(self, stage: str) -> bool:
        return stage in self.terminal_stages

    def index(self, stage: str) -> int:
        """Position of stage in the ordered track."""
        try:
            return self.stages.index(stage)
        except ValueError:
            raise UnknownStageError(f"Unknown {self.name} stage: {stage!r}") from None

    def next_stage(self, stage: str) -> str | None:
        """Stage after `stage`, or None when `stage` is the last one."""
        position = self.index(stage)
        if position + 1 >= len(self.stages):
            return None
        return self.stages[position + 1]

    def progress_percent(self, stage: str) -> float | None:
        """Share of the track reached at `stage`. None for terminal stages."""
        if self.is_terminal(stage):
            return None
        return round((self.index(stage) + 1) / len(self.stages) * 100, 2)

    def validate_transition(self, current: str, target: str) -> None:
        """
        Raise unless moving from `current` to `target` is allowed.

        Allowed moves go strictly forward along the track, or into a terminal
        stage from any stage except the last one.
        """
        if self.is_terminal(current):
            raise StageTransitionError(f"{self.name} is already {current}")
        current_index = self.index(current)

        if self.is_terminal(target):
            if current == self.last:
                raise StageTransitionError(f"{self.name} is already at final stage {current}")
            return

        target_index = self.index(target)
        if target_index <= current_index:
            raise StageTransitionError(
                f"Cannot move {self.name} from {current} to {target}: "
                "target must be a later stage"
            )

    def timeline(
        self,
        current: str,
        completed_at_by_stage: dict[str, datetime] | None = None,
    ) -> list[TimelineEntry]:
        """
        Per-stage status for display.

        Stages before `current` are completed; `current` is current (or
        completed when it is the last stage); the rest are upcoming. When
        `current` is terminal no stage is current: the furthest stage in the
        history is the one abandoned and shows as cancelled, earlier history
        stages are completed.
        """
        completed_at_by_stage = completed_at_by_stage or {}

        if self.is_terminal(current):
            reached = [stage for stage in self.stages if stage in completed_at_by_stage]
            abandoned = reached[-1] if reached else None
            terminal_entries: list[TimelineEntry] = []
            for stage in self.stages:
                state: TimelineStatus = "upcoming"
                if stage == abandoned:
                    state = "cancelled"
                elif stage in completed_at_by_stage:
                    state = "completed"
                terminal_entries.append(
                    TimelineEntry(
                        stage=stage,
                        status=state,
                        completed_at=completed_at_by_stage.get(stage),
                    )
                )
            return terminal_entries

        current_index = self.index(current)
        at_final = current == self.last
        entries: list[TimelineEntry] = []
        for position, stage in enumerate(self.stages):
            status: TimelineStatus
            if position < current_index or (at_final and position == current_index):
                status = "completed"
            elif position == current_index:
                status = "current"
            else:
                status = "upcoming"
            entries.append(
                TimelineEntry(
                    stage=stage,
                    status=status,
                    completed_at=completed_at_by_stage.get(stage),
                )
            )
        return entries


CASE_TRACK = StageTrack(
    name="case",
    stages=tuple(stage.value for stage in CaseStage),
)

JOURNEY_TRACK = StageTrack(
    name="journey",
    stages=tuple(
        status.value for status in JourneyStatus if status != JourneyStatus.CANCELLED
    ),
    terminal_stages=(JourneyStatus.CANCELLED.value,),
)


# =============================================================================
# Persistence
# =============================================================================

def apply_transition(
    db: Session,
    record: Any,
    *,
    track: StageTrack,
    stage_attr: str,
    history_model: type,
    history_fk: str,
    target: str,
    actor_user_id: UUID | None,
    notes: str | None = None,
    extra_values: dict[str, Any] | None = None,
):
    """
    Move `record` to `target` and append one history row for the stage left.

    The UPDATE only matches while the stored stage still equals the stage
    read from `record`; otherwise StageConflictError is raised and nothing
    is written. Returns the new history row.
    """
    model = type(record)
    current = getattr(record, stage_attr)
    track.validate_transition(current, target)

    now = utcnow()
    values: dict[str, Any] = {stage_attr: target, "updated_at": now}
    if extra_values:
        values.update(extra_values)

    result = db.execute(
        update(model)
        .where(model.id == record.id, getattr(model, stage_attr) == current)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        db.rollback()
        logger.info(
            "Stage conflict on %s %s: expected %s", track.name, record.id, current
        )
        raise StageConflictError(
            f"{track.name.capitalize()} stage changed concurrently; reload and retry"
        )

    entry = history_model(
        **{history_fk: record.id},
        stage=current,
        completed_at=now,
        completed_by_user_id=actor_user_id,
        notes=notes,
    )
    db.add(entry)
    db.commit()
    db.refresh(record)

    logger.info(
        "%s %s moved %s -> %s by %s", track.name, record.id, current, target, actor_user_id
    )
    return entry


def completed_at_map(history: list[Any]) -> dict[str, datetime]:
    """Latest completion time per stage from history rows."""
    result: dict[str, datetime] = {}
    for entry in history:
        result[entry.stage] = entry.completed_at
    return result
