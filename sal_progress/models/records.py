"""
Domain record models consumed by the SAL progress engine.

Each domain collaborator (journal, reading, tasks, vocabulary, life arenas,
gravity, goals) owns its records. The engine only reads snapshots of them,
so these models are frozen and deliberately lenient:

- Collaborators send camelCase keys; snake_case is accepted too
- Unknown keys are ignored
- A field that fails validation falls back to its default instead of raising
- Aware timestamps are normalised to naive UTC, naive ones are kept as-is

parse_records() turns a raw snapshot (None, a list, or a dict keyed by id)
into a list of models, skipping entries that are not mappings at all.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from enum import StrEnum
from typing import Annotated, Any, TypeVar

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from sal_progress.lib.timeutil import naive_utc

logger = logging.getLogger(__name__)


def _bounded(low: float, high: float):
    def _clamp(value: float) -> float:
        return max(low, min(high, value))
    return _clamp


Timestamp = Annotated[datetime | None, AfterValidator(naive_utc)]
Severity = Annotated[int, AfterValidator(_bounded(1, 5))]
Percent = Annotated[int, AfterValidator(_bounded(0, 100))]
ArenaScore = Annotated[
    float, Field(allow_inf_nan=False), AfterValidator(_bounded(0, 10))
]
NonNegativeInt = Annotated[int, AfterValidator(_bounded(0, float("inf")))]


# =============================================================================
# Enums
# =============================================================================


class TaskStatus(StrEnum):
    """Lifecycle of a SAL challenge task."""

    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class MasteryLevel(StrEnum):
    """Vocabulary study classification."""

    NEW = "new"
    LEARNING = "learning"
    FAMILIAR = "familiar"
    MASTERED = "mastered"


class GravityStatus(StrEnum):
    """Resolution state of a gravity item."""

    ACTIVE = "active"
    IMPROVING = "improving"
    RESOLVED = "resolved"


class GoalStatus(StrEnum):
    """State of a growth goal."""

    ACTIVE = "active"
    COMPLETED = "completed"
    PAUSED = "paused"


# =============================================================================
# Base
# =============================================================================


class DomainRecord(BaseModel):
    """Read-only snapshot record with per-field safe defaults."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    @field_validator("*", mode="wrap")
    @classmethod
    def _default_on_error(
        cls,
        value: Any,
        handler: ValidatorFunctionWrapHandler,
        info: ValidationInfo,
    ) -> Any:
        try:
            return handler(value)
        except PydanticValidationError:
            field_info = cls.model_fields[info.field_name]
            logger.debug(
                "Malformed %s.%s=%r, using default",
                cls.__name__, info.field_name, value,
            )
            return field_info.get_default(call_default_factory=True)


# =============================================================================
# Journal
# =============================================================================


class JournalEntry(DomainRecord):
    """A journal entry; only its size, type and date matter here."""

    id: str | int = ""
    title: str = ""
    type: str = "reflection"
    date: Timestamp = None
    word_count: NonNegativeInt = 0
    tags: list[str] = Field(default_factory=list)


# =============================================================================
# Reading
# =============================================================================


class ReadingProgress(DomainRecord):
    """Progress through one chapter of a SAL book."""

    book_id: str = ""
    chapter_id: str = ""
    position: float = 0.0
    total_time: NonNegativeInt = 0  # seconds
    last_read: Timestamp = None
    completed: bool = False


# =============================================================================
# Tasks
# =============================================================================


class SALTask(DomainRecord):
    """A SAL challenge task."""

    id: str | int = ""
    title: str = ""
    category: str = "foundation"
    status: TaskStatus = TaskStatus.NOT_STARTED
    started_date: Timestamp = None
    completed_date: Timestamp = None
    time_spent: NonNegativeInt = 0


# =============================================================================
# Vocabulary
# =============================================================================


class TasksVocabularyWord(DomainRecord):
    """A word captured while working on a task (no review tracking)."""

    id: str | int = ""
    word: str = ""
    date_added: Timestamp = None


class VocabularyWord(DomainRecord):
    """A library vocabulary word under spaced-repetition review."""

    id: str | int = ""
    word: str = ""
    date_added: Timestamp = None
    last_reviewed: Timestamp = None
    review_count: NonNegativeInt = 0
    mastery_level: MasteryLevel = MasteryLevel.NEW
    difficulty_rating: Severity = 3
    next_review_date: Timestamp = None

    @model_validator(mode="before")
    @classmethod
    def _legacy_mastered_flag(cls, data: Any) -> Any:
        # Older study sessions wrote a boolean "mastered" instead of a level
        if (
            isinstance(data, Mapping)
            and "masteryLevel" not in data
            and "mastery_level" not in data
            and data.get("mastered") is True
        ):
            return {**data, "mastery_level": MasteryLevel.MASTERED.value}
        return data


# =============================================================================
# Life arenas
# =============================================================================


class ArenaMilestone(DomainRecord):
    """A milestone inside a life arena."""

    id: str | int = ""
    title: str = ""
    completed: bool = False
    completed_date: Timestamp = None


class LifeArena(DomainRecord):
    """A self-rated life arena (score 1-10)."""

    id: str | int = ""
    name: str = ""
    current_score: ArenaScore = 0.0
    target_score: ArenaScore = 10.0
    milestones: list[ArenaMilestone] = Field(default_factory=list)
    last_updated: Timestamp = None


# =============================================================================
# Growth: gravity, goals, reviews
# =============================================================================


class GravityItem(DomainRecord):
    """A self-identified limiting behavior or belief."""

    id: str | int = ""
    category_id: str = ""
    name: str = ""
    severity: Severity = 3
    status: GravityStatus = GravityStatus.ACTIVE
    date_identified: Timestamp = None
    last_reviewed: Timestamp = None


class GrowthGoal(DomainRecord):
    """A growth goal with self-reported progress."""

    id: str | int = ""
    title: str = ""
    category: str = ""
    progress: Percent = 0
    status: GoalStatus = GoalStatus.ACTIVE
    date_created: Timestamp = None
    last_updated: Timestamp = None


class WeeklyReview(DomainRecord):
    """A weekly self-review; only counted by the engine."""

    id: str | int = ""
    week_of: Timestamp = None
    overall_rating: int = 0
    date_created: Timestamp = None


# =============================================================================
# Parsing
# =============================================================================

RecordT = TypeVar("RecordT", bound=DomainRecord)


def parse_records(model: type[RecordT], raw: Any) -> list[RecordT]:
    """Parse a raw domain snapshot into records.

    Args:
        model: Record model to build
        raw: None, an iterable of mappings/records, or a mapping of
            id -> mapping (the reading domain keys progress by chapter)

    Returns:
        List of records; never raises for data-shape reasons
    """
    if raw is None:
        return []
    items: Iterable[Any]
    if isinstance(raw, Mapping):
        items = raw.values()
    elif isinstance(raw, (str, bytes)):
        logger.debug("Ignoring scalar snapshot for %s", model.__name__)
        return []
    else:
        try:
            items = iter(raw)
        except TypeError:
            logger.debug("Ignoring non-iterable snapshot for %s", model.__name__)
            return []

    records: list[RecordT] = []
    for item in items:
        if isinstance(item, model):
            records.append(item)
        elif isinstance(item, Mapping):
            records.append(model.model_validate(dict(item)))
        else:
            logger.debug("Skipping malformed %s record: %r", model.__name__, item)
    return records
