"""
Unit tests for the discipline guardrails.

The journal must stay locked until the routine, the bias
check and the focus calibration are all done.
"""

import random
import sys
from datetime import datetime
from pathlib import Path

import pytest

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from ficus.core.config import Config, Language
from ficus.core.i18n import get_translations
from ficus.core.storage import LocalStore
from ficus.guardrails.rules import (
    CALIBRATION_SECONDS,
    CALIBRATION_TARGET,
    STREAK_GOAL_DAYS,
    CalibrationState,
    DisciplineGate,
    FocusCalibration,
    build_routine,
    daily_affirmation,
    discipline_streak,
    mood_label,
    streak_key,
    streak_percentage,
)

EN = get_translations(Language.ENGLISH)


def passed_calibration():
    calibration = FocusCalibration()
    calibration.start(0)
    for i in range(CALIBRATION_TARGET):
        calibration.pop(i * 0.5)
    calibration.tick(CALIBRATION_SECONDS)
    return calibration


@pytest.fixture
def store(tmp_path):
    return LocalStore(Config(database_path=str(tmp_path / "ficus.db")))


class TestFocusCalibration:
    """Test the balloon round."""

    def test_idle_until_started(self):
        calibration = FocusCalibration()

        assert calibration.state == CalibrationState.IDLE
        assert calibration.time_left(100) == CALIBRATION_SECONDS
        assert calibration.pop(1) == CalibrationState.IDLE
        assert calibration.score == 0

    def test_success(self):
        assert passed_calibration().state == CalibrationState.SUCCESS

    def test_fail_when_too_few_pops(self):
        calibration = FocusCalibration()
        calibration.start(0)
        for i in range(CALIBRATION_TARGET - 1):
            calibration.pop(i)

        assert calibration.tick(CALIBRATION_SECONDS + 1) == CalibrationState.FAIL

    def test_pops_after_time_up_ignored(self):
        calibration = FocusCalibration(duration=5, target=2)
        calibration.start(0)
        calibration.pop(1)

        assert calibration.pop(6) == CalibrationState.FAIL
        assert calibration.score == 1

    def test_still_playing_before_time_up(self):
        calibration = FocusCalibration()
        calibration.start(0)
        for i in range(CALIBRATION_TARGET + 2):
            calibration.pop(i * 0.1)

        assert calibration.tick(5) == CalibrationState.PLAYING
        assert calibration.time_left(5) == CALIBRATION_SECONDS - 5

    def test_restart_resets_score(self):
        calibration = FocusCalibration()
        calibration.start(0)
        calibration.pop(1)
        calibration.start(100)

        assert calibration.score == 0
        assert calibration.state == CalibrationState.PLAYING


class TestDisciplineGate:
    """Test the journal lock."""

    def test_locked_by_default(self):
        gate = DisciplineGate.for_language(EN)

        assert not gate.can_journal
        assert {w.category for w in gate.warnings()} == {"ROUTINE", "BIASES", "FOCUS"}

    def test_all_done_unlocks(self):
        gate = DisciplineGate.for_language(EN)
        for item in gate.routine:
            gate.check(item.id)
        gate.toggle_bias(EN.biases[0])
        gate.toggle_bias(EN.biases[1])
        gate.record_calibration(passed_calibration())

        assert gate.routine_complete
        assert gate.can_journal
        assert gate.warnings() == []

    def test_one_bias_is_not_enough(self):
        gate = DisciplineGate.for_language(EN)
        for item in gate.routine:
            gate.check(item.id)
        gate.toggle_bias(EN.biases[0])
        gate.record_calibration(passed_calibration())

        assert not gate.can_journal
        assert [w.category for w in gate.warnings()] == ["BIASES"]

    def test_toggle_bias_twice_removes_it(self):
        gate = DisciplineGate.for_language(EN)
        gate.toggle_bias(EN.biases[0])
        gate.toggle_bias(EN.biases[0])

        assert gate.biases == set()

    def test_failed_calibration_keeps_lock(self):
        gate = DisciplineGate.for_language(EN)
        calibration = FocusCalibration()
        calibration.start(0)
        calibration.tick(CALIBRATION_SECONDS)
        gate.record_calibration(calibration)

        assert gate.focused is False

    def test_uncheck(self):
        gate = DisciplineGate.for_language(EN)
        gate.check("0")
        gate.check("0", False)

        assert not gate.routine[0].checked

    def test_unknown_item(self):
        with pytest.raises(ValueError):
            DisciplineGate.for_language(EN).check("99")

    def test_routine_follows_language(self):
        marathi = get_translations(Language.MARATHI)
        routine = build_routine(marathi)

        assert [item.text for item in routine] == list(marathi.routine_items)
        assert [item.id for item in routine] == [str(i) for i in range(len(routine))]

    def test_warning_format(self):
        warning = DisciplineGate.for_language(EN).warnings()[-1]
        assert str(warning).startswith("[FOCUS] ")


class TestMood:
    """Test mood slider labels."""

    @pytest.mark.parametrize("value,label", [
        (0, "Excessive Fear"),
        (29, "Excessive Fear"),
        (30, "Neutral State"),
        (70, "Neutral State"),
        (71, "Extreme Greed"),
        (100, "Extreme Greed"),
    ])
    def test_labels(self, value, label):
        assert mood_label(value) == label


class TestStreak:
    """Test the discipline streak."""

    def test_first_day(self, store):
        now = datetime(2024, 1, 1, 9, 0)

        assert discipline_streak(store, "abc123", now) == 1
        assert store.get(streak_key("ABC123")) == now.isoformat()

    def test_counts_days(self, store):
        discipline_streak(store, "ABC123", datetime(2024, 1, 1, 9, 0))

        assert discipline_streak(store, "ABC123", datetime(2024, 1, 1, 23, 0)) == 1
        assert discipline_streak(store, "ABC123", datetime(2024, 1, 11, 12, 0)) == 11

    def test_unreadable_start_resets(self, store):
        store.set(streak_key("ABC123"), "yesterday-ish")
        now = datetime(2024, 3, 1)

        assert discipline_streak(store, "ABC123", now) == 1
        assert store.get(streak_key("ABC123")) == now.isoformat()

    def test_blank_id(self, store):
        assert discipline_streak(store, "", datetime(2024, 1, 1)) == 1

    def test_percentage(self):
        assert streak_percentage(STREAK_GOAL_DAYS) == 100
        assert streak_percentage(0) == 0


class TestAffirmation:
    def test_picks_from_bundle(self):
        assert daily_affirmation(EN, random.Random(7)) in EN.affirmations
