"""Onboarding answers as a reading source.

Answers are raw labels keyed by metric kind. Each one goes through the level
resolver; labels it cannot classify are treated as absent data.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from amped.domains.longevity.connectors import AnswerStore
from amped.domains.longevity.domain_logic.level_resolver import reading_from_answer
from amped.domains.longevity.domain_logic.metric_models import MetricKind, MetricReading

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryAnswerStore:
    """AnswerStore held in process memory."""

    def __init__(self, answers: dict[str, str] | None = None) -> None:
        self._answers: dict[str, str] = dict(answers or {})

    def get_answers(self) -> dict[str, str]:
        return dict(self._answers)

    def set_answer(self, kind: MetricKind | str, label: str) -> None:
        key = kind.value if isinstance(kind, MetricKind) else kind
        self._answers[key] = label

    def clear(self) -> None:
        self._answers.clear()


class QuestionnaireReadingSource:
    """Turns stored answers into user-input readings stamped at ``clock()``."""

    def __init__(
        self,
        store: AnswerStore,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._store = store
        self._clock = clock

    @property
    def data_source(self) -> str:
        return "questionnaire"

    async def get_readings(self, period: str = "day") -> list[MetricReading]:
        timestamp = self._clock()
        readings: list[MetricReading] = []
        for key, label in self._store.get_answers().items():
            try:
                kind = MetricKind(key)
            except ValueError:
                logger.warning("Dropping answer for unknown metric %r", key)
                continue
            reading = reading_from_answer(kind, label, timestamp)
            if reading is None:
                logger.warning("Dropping unrecognised %s answer %r", kind.value, label)
                continue
            readings.append(reading)
        return readings
