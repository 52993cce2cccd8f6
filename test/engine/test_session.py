"""Tests for angle mode handling and calculator sessions."""

import threading

import pytest

from calcengine.config import reset_settings
from calcengine.exceptions import InvalidInputError
from calcengine.expression import AngleMode, AngleModeContext
from calcengine.session import CalculatorSession


class TestAngleMode:
    """Tests for AngleMode parsing and toggling."""

    @pytest.mark.parametrize("value", ["deg", "DEG", "degree", " Degrees "])
    def test_parse_degrees(self, value):
        assert AngleMode.parse(value) is AngleMode.DEGREES

    @pytest.mark.parametrize("value", ["rad", "RAD", "radian", "radians"])
    def test_parse_radians(self, value):
        assert AngleMode.parse(value) is AngleMode.RADIANS

    @pytest.mark.parametrize("value", ["grad", "", 1])
    def test_parse_rejects_unknown(self, value):
        with pytest.raises(InvalidInputError):
            AngleMode.parse(value)

    def test_toggled(self):
        assert AngleMode.DEGREES.toggled() is AngleMode.RADIANS
        assert AngleMode.RADIANS.toggled() is AngleMode.DEGREES

    def test_labels(self):
        assert AngleMode.DEGREES.label == "DEG"
        assert AngleMode.RADIANS.label == "RAD"


class TestAngleModeContext:
    """Tests for the mutable holder."""

    def test_default_is_degrees(self):
        assert AngleModeContext().snapshot() is AngleMode.DEGREES

    def test_set_and_toggle(self):
        context = AngleModeContext()
        assert context.set("rad") is AngleMode.RADIANS
        assert context.toggle() is AngleMode.DEGREES
        assert context.snapshot() is AngleMode.DEGREES

    def test_repr(self):
        assert repr(AngleModeContext(AngleMode.RADIANS)) == "AngleModeContext(RAD)"


class TestCalculatorSession:
    """Tests for CalculatorSession."""

    def test_default_mode_is_degrees(self):
        session = CalculatorSession()
        assert session.angle_mode is AngleMode.DEGREES
        assert session.evaluate("sin(30)") == pytest.approx(0.5)

    def test_default_mode_from_environment(self, monkeypatch):
        monkeypatch.setenv("CALCENGINE_ANGLE_MODE", "rad")
        reset_settings()
        assert CalculatorSession().angle_mode is AngleMode.RADIANS

    def test_explicit_mode_wins(self, monkeypatch):
        monkeypatch.setenv("CALCENGINE_ANGLE_MODE", "rad")
        reset_settings()
        assert CalculatorSession("deg").angle_mode is AngleMode.DEGREES

    def test_toggle_changes_results(self, degrees_session):
        assert degrees_session.evaluate("sin(90)") == pytest.approx(1.0)
        degrees_session.toggle_angle_mode()
        assert degrees_session.angle_mode is AngleMode.RADIANS
        assert degrees_session.evaluate("sin(π/2)") == pytest.approx(1.0)

    def test_set_angle_mode(self, radians_session):
        assert radians_session.set_angle_mode("degrees") is AngleMode.DEGREES
        assert radians_session.evaluate("acos(0)") == pytest.approx(90.0)

    def test_trace_records_mode(self, radians_session):
        trace = radians_session.trace("atan(1)")
        assert trace.angle_mode is AngleMode.RADIANS
        assert trace.result == pytest.approx(0.7853981633974483)

    def test_sessions_are_independent(self, degrees_session, radians_session):
        degrees_session.toggle_angle_mode()
        assert degrees_session.angle_mode is AngleMode.RADIANS
        assert radians_session.angle_mode is AngleMode.RADIANS
        radians_session.toggle_angle_mode()
        assert degrees_session.angle_mode is AngleMode.RADIANS

    def test_toggle_during_evaluations_uses_one_mode_per_evaluation(self, degrees_session):
        """Each result matches the mode recorded in its own trace."""
        stop = threading.Event()

        def toggler():
            while not stop.is_set():
                degrees_session.toggle_angle_mode()

        thread = threading.Thread(target=toggler)
        thread.start()
        try:
            for _ in range(200):
                trace = degrees_session.trace("asin(1)")
                expected = 90.0 if trace.angle_mode is AngleMode.DEGREES else 1.5707963267948966
                assert trace.result == pytest.approx(expected)
        finally:
            stop.set()
            thread.join()
