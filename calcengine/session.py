"""Calculator session - owns the angle mode for a stream of evaluations."""

from __future__ import annotations

from typing import Optional, Union

from calcengine.config import get_settings
from calcengine.expression import AngleMode, AngleModeContext, EvaluationTrace, trace_expression
from calcengine.logger import session_logger as logger


class CalculatorSession:
    """One user's calculator state.

    The angle mode may be toggled from another thread while an evaluation runs.
    Each evaluation snapshots the mode once, and that snapshot is used for the
    whole computation.
    """

    def __init__(self, angle_mode: Optional[Union[str, AngleMode]] = None):
        if angle_mode is None:
            angle_mode = get_settings().angle_mode
        self._angle = AngleModeContext(AngleMode.parse(angle_mode))

    @property
    def angle_mode(self) -> AngleMode:
        return self._angle.snapshot()

    def set_angle_mode(self, mode: Union[str, AngleMode]) -> AngleMode:
        new_mode = self._angle.set(mode)
        logger.debug("Angle mode set", angle_mode=new_mode.label)
        return new_mode

    def toggle_angle_mode(self) -> AngleMode:
        new_mode = self._angle.toggle()
        logger.debug("Angle mode toggled", angle_mode=new_mode.label)
        return new_mode

    def trace(self, expression: Optional[str]) -> EvaluationTrace:
        return trace_expression(expression, self._angle.snapshot())

    def evaluate(self, expression: Optional[str]) -> float:
        """Evaluate with the angle mode current at the time of the call.

        Raises:
            ExpressionError: A classified syntax, domain or arithmetic error
        """
        return self.trace(expression).result
