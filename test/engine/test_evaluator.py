"""Tests for the RPN evaluator and function semantics."""

import math

import pytest

from calcengine.exceptions import (
    CalcArithmeticError,
    CalcDomainError,
    CalcSyntaxError,
    ErrorKind,
    ErrorReason,
)
from calcengine.expression import AngleMode, RPNEvaluator, Token, evaluate_expression, evaluate_postfix
from calcengine.expression.tokens import NEGATE, LEFT_PAREN

DEG = AngleMode.DEGREES
RAD = AngleMode.RADIANS


def n(text):
    return Token.number(text)


def op(symbol):
    return Token.operator(symbol)


class TestStackEvaluation:
    """Tests for evaluating raw postfix sequences."""

    def test_worked_example(self):
        # 3 4 2 * +  ->  11
        assert evaluate_postfix([n("3"), n("4"), n("2"), op("*"), op("+")]) == 11.0

    def test_right_operand_is_popped_first(self):
        assert evaluate_postfix([n("10"), n("4"), op("-")]) == 6.0
        assert evaluate_postfix([n("2"), n("3"), op("^")]) == 8.0

    def test_constants(self):
        assert evaluate_postfix([Token.constant("π")]) == pytest.approx(math.pi)
        assert evaluate_postfix([Token.constant("e")]) == pytest.approx(math.e)

    def test_unary_minus(self):
        assert evaluate_postfix([n("5"), NEGATE]) == -5.0

    def test_evaluator_keeps_its_mode(self):
        evaluator = RPNEvaluator(RAD)
        assert evaluator.angle_mode is RAD
        assert evaluator.evaluate([Token.constant("π"), Token.function("cos")]) == pytest.approx(-1.0)

    def test_mode_accepts_strings(self):
        assert RPNEvaluator("rad").angle_mode is RAD


class TestMalformedStreams:
    """Tests for operand/operator imbalance."""

    def test_binary_operator_without_operands(self):
        with pytest.raises(CalcSyntaxError) as exc_info:
            evaluate_postfix([n("1"), op("+")])
        assert exc_info.value.reason is ErrorReason.INSUFFICIENT_OPERANDS

    def test_function_without_operand(self):
        with pytest.raises(CalcSyntaxError) as exc_info:
            evaluate_postfix([Token.function("sin")])
        assert exc_info.value.reason is ErrorReason.INSUFFICIENT_OPERANDS

    def test_negation_without_operand(self):
        with pytest.raises(CalcSyntaxError) as exc_info:
            evaluate_postfix([NEGATE])
        assert exc_info.value.reason is ErrorReason.INSUFFICIENT_OPERANDS

    def test_too_many_operands(self):
        with pytest.raises(CalcSyntaxError) as exc_info:
            evaluate_postfix([n("1"), n("2")])
        assert exc_info.value.reason is ErrorReason.MALFORMED_EXPRESSION
        assert exc_info.value.details["stack_size"] == 2

    def test_empty_sequence(self):
        with pytest.raises(CalcSyntaxError) as exc_info:
            evaluate_postfix([])
        assert exc_info.value.reason is ErrorReason.MALFORMED_EXPRESSION

    def test_parenthesis_in_postfix(self):
        with pytest.raises(CalcSyntaxError):
            evaluate_postfix([n("1"), LEFT_PAREN])


class TestBinaryOperators:
    """Tests for binary operator semantics."""

    @pytest.mark.parametrize(
        "expression,expected",
        [
            ("7+3", 10.0),
            ("7-3", 4.0),
            ("7*3", 21.0),
            ("7/2", 3.5),
            ("7%3", 1.0),
            ("-7%3", -1.0),
            ("7.5%2", 1.5),
            ("2^10", 1024.0),
            ("4^0.5", 2.0),
            ("2^(-1)", 0.5),
        ],
    )
    def test_results(self, expression, expected):
        assert evaluate_expression(expression) == pytest.approx(expected)

    def test_division_by_zero(self):
        with pytest.raises(CalcArithmeticError) as exc_info:
            evaluate_expression("1/0")
        assert exc_info.value.kind is ErrorKind.ARITHMETIC
        assert exc_info.value.reason is ErrorReason.DIVISION_BY_ZERO

    def test_modulo_by_zero(self):
        with pytest.raises(CalcArithmeticError):
            evaluate_expression("5%0")

    def test_division_by_negative_zero(self):
        with pytest.raises(CalcArithmeticError):
            evaluate_expression("1/-0")

    def test_division_by_expression_equal_to_zero(self):
        with pytest.raises(CalcArithmeticError):
            evaluate_expression("1/(2-2)")

    def test_power_overflow_is_infinite(self):
        assert evaluate_expression("10^400") == math.inf

    def test_zero_to_negative_power_is_infinite(self):
        assert evaluate_expression("0^(-1)") == math.inf

    def test_fractional_power_of_negative_is_nan(self):
        assert math.isnan(evaluate_expression("(-8)^(1/3)"))


class TestFunctions:
    """Tests for function semantics and angle handling."""

    @pytest.mark.parametrize(
        "expression,expected",
        [
            ("sin(30)", 0.5),
            ("cos(60)", 0.5),
            ("tan(45)", 1.0),
            ("asin(1)", 90.0),
            ("acos(0)", 90.0),
            ("atan(1)", 45.0),
        ],
    )
    def test_trigonometry_in_degrees(self, expression, expected):
        assert evaluate_expression(expression, DEG) == pytest.approx(expected, abs=1e-9)

    @pytest.mark.parametrize(
        "expression,expected",
        [
            ("sin(π/2)", 1.0),
            ("cos(π)", -1.0),
            ("tan(0)", 0.0),
            ("asin(1)", math.pi / 2),
            ("acos(-1)", math.pi),
            ("atan(1)", math.pi / 4),
        ],
    )
    def test_trigonometry_in_radians(self, expression, expected):
        assert evaluate_expression(expression, RAD) == pytest.approx(expected, abs=1e-9)

    @pytest.mark.parametrize(
        "expression,expected",
        [
            ("log(1000)", 3.0),
            ("ln(e)", 1.0),
            ("exp(0)", 1.0),
            ("exp(1)", math.e),
            ("sqrt(16)", 4.0),
            ("sqrt(0)", 0.0),
            ("abs(-3)", 3.0),
            ("abs(3)", 3.0),
        ],
    )
    def test_other_functions(self, expression, expected):
        assert evaluate_expression(expression) == pytest.approx(expected)

    def test_angle_mode_does_not_affect_other_functions(self):
        assert evaluate_expression("sqrt(2)", DEG) == evaluate_expression("sqrt(2)", RAD)

    def test_exp_overflow_is_infinite(self):
        assert evaluate_expression("exp(1000)") == math.inf

    @pytest.mark.parametrize(
        "expression,reason",
        [
            ("sqrt(-1)", ErrorReason.SQRT_OF_NEGATIVE),
            ("log(0)", ErrorReason.LOG_OF_NON_POSITIVE),
            ("log(-10)", ErrorReason.LOG_OF_NON_POSITIVE),
            ("ln(0)", ErrorReason.LOG_OF_NON_POSITIVE),
            ("asin(2)", ErrorReason.INVERSE_TRIG_OUT_OF_RANGE),
            ("acos(-1.5)", ErrorReason.INVERSE_TRIG_OUT_OF_RANGE),
        ],
    )
    def test_domain_errors(self, expression, reason):
        with pytest.raises(CalcDomainError) as exc_info:
            evaluate_expression(expression)
        assert exc_info.value.kind is ErrorKind.DOMAIN
        assert exc_info.value.reason is reason
        assert exc_info.value.code == "DOMAIN_ERROR"

    def test_asin_accepts_interval_bounds(self):
        assert evaluate_expression("asin(-1)", DEG) == pytest.approx(-90.0)

    @pytest.mark.parametrize("function", ["sqrt", "log", "ln", "asin", "acos"])
    def test_nan_operand_is_a_domain_error(self, function):
        with pytest.raises(CalcDomainError):
            evaluate_expression(f"{function}((-8)^(1/3))")
