"""
Behavioral guardrails.

The journal stays locked until the trader has finished the
morning routine, named their emotional biases and passed the
focus calibration. Warnings explain what is still missing.
"""

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Set

from ficus.core.i18n import Translations
from ficus.core.storage import LocalStore
from ficus.license.keys import normalize_system_id

logger = logging.getLogger(__name__)

MIN_BIASES = 2
STREAK_GOAL_DAYS = 1111

CALIBRATION_SECONDS = 15
CALIBRATION_TARGET = 10


class GuardrailWarning:
    """A guardrail warning message."""

    def __init__(self, category: str, message: str):
        self.category = category
        self.message = message

    def __str__(self) -> str:
        return f"[{self.category}] {self.message}"


@dataclass
class ChecklistItem:
    id: str
    text: str
    checked: bool = False


def build_routine(translations: Translations) -> List[ChecklistItem]:
    """Morning routine checklist, all unchecked."""
    return [
        ChecklistItem(id=str(i), text=text)
        for i, text in enumerate(translations.routine_items)
    ]


class CalibrationState(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    SUCCESS = "success"
    FAIL = "fail"


class FocusCalibration:
    """
    Balloon-popping focus round.

    Pop at least CALIBRATION_TARGET balloons before
    CALIBRATION_SECONDS run out.
    """

    def __init__(self, duration: float = CALIBRATION_SECONDS, target: int = CALIBRATION_TARGET):
        self.duration = duration
        self.target = target
        self.state = CalibrationState.IDLE
        self.score = 0
        self.started_at: Optional[float] = None

    def start(self, now: float) -> None:
        """Begin (or restart) a round at time now, in seconds."""
        self.state = CalibrationState.PLAYING
        self.score = 0
        self.started_at = now

    def time_left(self, now: float) -> float:
        if self.started_at is None:
            return self.duration
        return max(0.0, self.duration - (now - self.started_at))

    def pop(self, now: float) -> CalibrationState:
        """Count a pop if the round is still running."""
        self.tick(now)
        if self.state == CalibrationState.PLAYING:
            self.score += 1
        return self.state

    def tick(self, now: float) -> CalibrationState:
        """Settle the round once time has run out."""
        if self.state == CalibrationState.PLAYING and self.time_left(now) <= 0:
            self.state = (
                CalibrationState.SUCCESS if self.score >= self.target else CalibrationState.FAIL
            )
            logger.info(f"Focus calibration finished: {self.state.value} ({self.score}/{self.target})")
        return self.state


@dataclass
class DisciplineGate:
    """Pre-journal discipline state."""

    routine: List[ChecklistItem]
    biases: Set[str] = field(default_factory=set)
    focused: bool = False

    @classmethod
    def for_language(cls, translations: Translations) -> "DisciplineGate":
        return cls(routine=build_routine(translations))

    def check(self, item_id: str, checked: bool = True) -> None:
        for item in self.routine:
            if item.id == item_id:
                item.checked = checked
                return
        raise ValueError(f"Unknown routine item: {item_id}")

    def toggle_bias(self, bias: str) -> None:
        if bias in self.biases:
            self.biases.discard(bias)
        else:
            self.biases.add(bias)

    def record_calibration(self, calibration: FocusCalibration) -> None:
        if calibration.state == CalibrationState.SUCCESS:
            self.focused = True

    @property
    def routine_complete(self) -> bool:
        return bool(self.routine) and all(item.checked for item in self.routine)

    @property
    def can_journal(self) -> bool:
        return self.routine_complete and len(self.biases) >= MIN_BIASES and self.focused

    def warnings(self) -> List[GuardrailWarning]:
        """
        Run all discipline checks.

        Returns list of warnings (empty if journaling is open).
        """
        warnings: List[GuardrailWarning] = []

        pending = [item.text for item in self.routine if not item.checked]
        if pending:
            warnings.append(GuardrailWarning(
                "ROUTINE",
                f"{len(pending)} routine item(s) unchecked: {', '.join(pending)}",
            ))

        if len(self.biases) < MIN_BIASES:
            warnings.append(GuardrailWarning(
                "BIASES",
                f"Name at least {MIN_BIASES} biases you feel today ({len(self.biases)} selected).",
            ))

        if not self.focused:
            warnings.append(GuardrailWarning(
                "FOCUS",
                "Focus calibration not passed yet.",
            ))

        for warning in warnings:
            logger.warning(f"Guardrail: {warning}")

        return warnings


def mood_label(value: int) -> str:
    """Label for the 0-100 mood slider."""
    if value < 30:
        return "Excessive Fear"
    if value > 70:
        return "Extreme Greed"
    return "Neutral State"


def streak_key(system_id: str) -> str:
    return f"sentinel_start_date_{normalize_system_id(system_id)}"


def discipline_streak(store: LocalStore, system_id: str, now: Optional[datetime] = None) -> int:
    """
    Days on the discipline journey, starting at 1.

    The first call records the start date. An unreadable
    start date is replaced with now.
    """
    if not system_id:
        return 1

    if now is None:
        now = datetime.now()

    key = streak_key(system_id)
    stored = store.get(key)

    start = None
    if stored:
        try:
            start = datetime.fromisoformat(stored)
        except ValueError:
            logger.warning(f"Unreadable streak start under {key}: {stored!r}")

    if start is None:
        store.set(key, now.isoformat())
        return 1

    if (start.tzinfo is None) != (now.tzinfo is None):
        start = start.replace(tzinfo=now.tzinfo)

    elapsed = abs((now - start).total_seconds())
    return int(elapsed // 86400) + 1


def streak_percentage(days: int) -> float:
    return days / STREAK_GOAL_DAYS * 100


def daily_affirmation(translations: Translations, rng: Optional[random.Random] = None) -> str:
    """Pick one affirmation for the day."""
    return (rng or random).choice(translations.affirmations)
