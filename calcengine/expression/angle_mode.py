"""Angle mode (degrees vs radians) and the session-owned holder for it."""

from __future__ import annotations

import threading
from enum import Enum
from typing import Union

from calcengine.exceptions import InvalidInputError


class AngleMode(str, Enum):
    """Unit used for trigonometric inputs and inverse-trigonometric outputs."""

    DEGREES = "deg"
    RADIANS = "rad"

    @property
    def label(self) -> str:
        """Short display label: ``DEG`` or ``RAD``."""
        return self.value.upper()

    def toggled(self) -> "AngleMode":
        return AngleMode.RADIANS if self is AngleMode.DEGREES else AngleMode.DEGREES

    @classmethod
    def parse(cls, value: Union[str, "AngleMode"]) -> "AngleMode":
        """Accept an AngleMode or one of deg/degrees/rad/radians (any case).

        Raises:
            InvalidInputError: If the value names no known mode
        """
        if isinstance(value, AngleMode):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key in ("deg", "degree", "degrees"):
                return cls.DEGREES
            if key in ("rad", "radian", "radians"):
                return cls.RADIANS
        raise InvalidInputError(
            f"Unknown angle mode: {value!r}. Supported: 'deg', 'rad'",
            {"angle_mode": str(value)},
        )


class AngleModeContext:
    """Mutable angle-mode flag owned by a calling session.

    Evaluations never read this object directly. Callers take a snapshot()
    once per evaluation and pass the resulting AngleMode down, so a toggle
    that races with an evaluation cannot change its mode halfway through.
    """

    def __init__(self, mode: AngleMode = AngleMode.DEGREES):
        self._mode = AngleMode.parse(mode)
        self._lock = threading.Lock()

    def snapshot(self) -> AngleMode:
        with self._lock:
            return self._mode

    def set(self, mode: Union[str, AngleMode]) -> AngleMode:
        parsed = AngleMode.parse(mode)
        with self._lock:
            self._mode = parsed
        return parsed

    def toggle(self) -> AngleMode:
        """Flip between degrees and radians and return the new mode."""
        with self._lock:
            self._mode = self._mode.toggled()
            return self._mode

    def __repr__(self) -> str:
        return f"AngleModeContext({self.snapshot().label})"
