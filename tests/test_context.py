"""Tests for EvaluationContext."""

import logging
import operator

import pytest

from memograph import (
    BinaryOperator,
    Constant,
    DuplicateNameError,
    EvaluationContext,
    Expression,
    NameMismatchError,
    Node,
    NotSetError,
    UnknownExpressionError,
    UnknownVariableError,
    Variable,
)


class CountingConstant(Node):
    """Constant test double counting recomputations."""

    def __init__(self, value: float) -> None:
        super().__init__()
        self.value = value
        self.computations = 0

    def needs_recalculation(self) -> bool:
        return False

    def _compute(self) -> float:
        self.computations += 1
        return self.value


@pytest.fixture
def sum_context() -> EvaluationContext:
    """Context with E = a + b."""
    ctx = EvaluationContext()
    a = ctx.create_variable("a")
    b = ctx.create_variable("b")
    ctx.create_expression("E", BinaryOperator(a, b, operator.add))
    return ctx


class TestRegistration:
    def test_register_and_lookup(self) -> None:
        ctx = EvaluationContext()
        x = Variable("x")
        expr = Expression("E", x)
        ctx.register_variable("x", x)
        ctx.register_expression("E", expr)

        assert ctx.is_known_variable("x")
        assert ctx.is_known_expression("E")
        assert ctx.lookup_variable("x") is x
        assert ctx.lookup_expression("E") is expr

    def test_unknown_names(self) -> None:
        ctx = EvaluationContext()
        assert not ctx.is_known_expression("E")
        assert not ctx.is_known_variable("x")

    def test_lookup_unknown_expression_raises(self) -> None:
        ctx = EvaluationContext()
        with pytest.raises(UnknownExpressionError, match="'missing'") as exc_info:
            ctx.lookup_expression("missing")
        assert exc_info.value.name == "missing"

    def test_lookup_unknown_variable_raises(self) -> None:
        ctx = EvaluationContext()
        with pytest.raises(UnknownVariableError, match="'missing'"):
            ctx.lookup_variable("missing")

    def test_unknown_lookup_is_key_error(self) -> None:
        ctx = EvaluationContext()
        with pytest.raises(KeyError):
            ctx.lookup_variable("missing")

    def test_duplicate_expression_raises(self) -> None:
        ctx = EvaluationContext()
        ctx.create_expression("E", Constant(1))
        with pytest.raises(DuplicateNameError, match="Expression 'E' is already registered"):
            ctx.create_expression("E", Constant(2))
        assert ctx.recalculate("E") == 1.0
        assert len(ctx) == 1

    def test_duplicate_variable_raises(self) -> None:
        ctx = EvaluationContext()
        ctx.create_variable("x")
        with pytest.raises(DuplicateNameError, match="Variable 'x'"):
            ctx.register_variable("x", Variable("x"))

    def test_expression_name_must_match(self) -> None:
        ctx = EvaluationContext()
        with pytest.raises(NameMismatchError, match="expression 'total' under the name 'sum'"):
            ctx.register_expression("sum", Expression("total", Constant(1)))
        assert not ctx.is_known_expression("sum")
        assert len(ctx) == 0

    def test_variable_name_must_match(self) -> None:
        ctx = EvaluationContext()
        with pytest.raises(NameMismatchError) as exc_info:
            ctx.register_variable("y", Variable("x"))
        assert exc_info.value.name == "y"
        assert exc_info.value.node_name == "x"
        assert not ctx.is_known_variable("y")

    def test_namespaces_are_distinct(self) -> None:
        ctx = EvaluationContext()
        x = ctx.create_variable("x", 2)
        ctx.create_expression("x", x * 3)
        assert ctx.is_known_variable("x")
        assert ctx.is_known_expression("x")
        assert ctx.recalculate("x") == 6.0

    def test_names_and_membership(self) -> None:
        ctx = EvaluationContext()
        ctx.create_variable("a")
        ctx.create_expression("second", Constant(2))
        ctx.create_expression("first", Constant(1))
        assert ctx.expression_names == ("second", "first")
        assert ctx.variable_names == ("a",)
        assert "a" in ctx
        assert "first" in ctx
        assert "b" not in ctx
        assert len(ctx) == 2


class TestSetVariable:
    def test_sets_known_variable(self) -> None:
        ctx = EvaluationContext()
        x = ctx.create_variable("x")
        ctx.set_variable("x", 5)
        assert x.evaluate() == 5.0
        assert x.needs_recalculation() is True

    def test_unknown_variable_is_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="memograph")
        ctx = EvaluationContext()
        ctx.set_variable("nope", 1)
        assert not ctx.is_known_variable("nope")
        assert "Ignoring write to unknown variable 'nope'" in caplog.text


class TestRecalculate:
    def test_sum(self, sum_context: EvaluationContext) -> None:
        sum_context.set_variable("a", 2)
        sum_context.set_variable("b", 3)
        assert sum_context.recalculate("E") == 5.0

    def test_update_after_set(self, sum_context: EvaluationContext) -> None:
        sum_context.set_variable("a", 2)
        sum_context.set_variable("b", 3)
        assert sum_context.recalculate("E") == 5.0
        sum_context.set_variable("a", 10)
        assert sum_context.recalculate("E") == 13.0

    def test_unknown_target_raises(self, sum_context: EvaluationContext) -> None:
        sum_context.set_variable("a", 2)
        sum_context.set_variable("b", 3)
        with pytest.raises(UnknownExpressionError, match="'missing'"):
            sum_context.recalculate("missing")

    def test_unknown_target_still_runs_pass(self, sum_context: EvaluationContext) -> None:
        sum_context.set_variable("a", 2)
        sum_context.set_variable("b", 3)
        with pytest.raises(UnknownExpressionError):
            sum_context.recalculate("missing")
        assert sum_context.lookup_variable("a").needs_recalculation() is False
        assert sum_context.lookup_expression("E").cached_value == 5.0

    def test_freezes_variables(self, sum_context: EvaluationContext) -> None:
        sum_context.set_variable("a", 2)
        sum_context.set_variable("b", 3)
        sum_context.recalculate("E")
        assert sum_context.lookup_variable("a").needs_recalculation() is False
        assert sum_context.lookup_expression("E").needs_recalculation() is False

    def test_unset_variable_aborts_pass(self, sum_context: EvaluationContext) -> None:
        sum_context.set_variable("a", 2)
        with pytest.raises(NotSetError, match="'b'"):
            sum_context.recalculate("E")
        # Variables are not frozen when a pass fails
        assert sum_context.lookup_variable("a").needs_recalculation() is True

    def test_function_error_aborts_pass(self) -> None:
        ctx = EvaluationContext()
        x = ctx.create_variable("x", 0)
        ctx.create_expression("inverse", 1 / x)
        with pytest.raises(ZeroDivisionError):
            ctx.recalculate("inverse")
        assert x.needs_recalculation() is True
        ctx.set_variable("x", 4)
        assert ctx.recalculate("inverse") == 0.25

    def test_failure_in_other_expression_aborts_target(self) -> None:
        ctx = EvaluationContext()
        ctx.create_variable("unset")
        ctx.create_expression("ok", Constant(1))
        ctx.create_expression("broken", ctx.lookup_variable("unset") + 1)
        with pytest.raises(NotSetError):
            ctx.recalculate("ok")

    def test_idempotent(self) -> None:
        ctx = EvaluationContext()
        a = ctx.create_variable("a", 2)
        counter = CountingConstant(3.0)
        ctx.create_expression("E", a + counter)

        first = ctx.recalculate("E")
        second = ctx.recalculate("E")

        assert first == second == 5.0
        assert counter.computations == 1

    def test_constants_not_recomputed_after_variable_change(self) -> None:
        ctx = EvaluationContext()
        a = ctx.create_variable("a", 2)
        counter = CountingConstant(3.0)
        ctx.create_expression("E", a * counter)

        assert ctx.recalculate("E") == 6.0
        ctx.set_variable("a", 5)
        assert ctx.recalculate("E") == 15.0
        assert counter.computations == 1

    def test_shared_variable_across_expressions(self) -> None:
        ctx = EvaluationContext()
        a = ctx.create_variable("a")
        ctx.create_expression("E1", a * 2)
        ctx.create_expression("E2", a * 3)

        a.set(5)
        assert ctx.recalculate("E1") == 10.0
        assert ctx.recalculate("E2") == 15.0

    def test_shared_variable_updated_between_passes(self) -> None:
        ctx = EvaluationContext()
        a = ctx.create_variable("a", 1)
        ctx.create_expression("E1", a * 2)
        ctx.create_expression("E2", a * 3)
        ctx.recalculate("E1")

        ctx.set_variable("a", 5)
        ctx.recalculate("E1")
        assert ctx.lookup_expression("E2").cached_value == 15.0
        assert ctx.recalculate("E2") == 15.0

    def test_expression_of_expression(self) -> None:
        ctx = EvaluationContext()
        x = ctx.create_variable("x", 2)
        base = ctx.create_expression("base", x + 1)
        ctx.create_expression("scaled", base * 10)
        assert ctx.recalculate("scaled") == 30.0
        ctx.set_variable("x", 4)
        assert ctx.recalculate("scaled") == 50.0

    def test_unregistered_variable_stays_dirty(self) -> None:
        ctx = EvaluationContext()
        hidden = Variable("hidden", 1)
        ctx.create_expression("E", hidden + 1)
        assert ctx.recalculate("E") == 2.0
        assert hidden.needs_recalculation() is True
        hidden.set(2)
        assert ctx.recalculate("E") == 3.0

    def test_empty_context(self) -> None:
        ctx = EvaluationContext()
        with pytest.raises(UnknownExpressionError):
            ctx.recalculate("E")

    def test_logs_pass(self, caplog: pytest.LogCaptureFixture, sum_context: EvaluationContext) -> None:
        caplog.set_level(logging.DEBUG, logger="memograph")
        sum_context.set_variable("a", 1)
        sum_context.set_variable("b", 1)
        sum_context.recalculate("E")
        assert "Recalculating 1 expressions" in caplog.text
        assert "Froze 2 variables" in caplog.text


class TestRecalculateAll:
    def test_returns_values_in_registration_order(self) -> None:
        ctx = EvaluationContext()
        a = ctx.create_variable("a", 4)
        ctx.create_expression("z", a + 1)
        ctx.create_expression("y", a * 2)
        result = ctx.recalculate_all()
        assert result == {"z": 5.0, "y": 8.0}
        assert list(result) == ["z", "y"]

    def test_freezes_variables(self) -> None:
        ctx = EvaluationContext()
        a = ctx.create_variable("a", 4)
        ctx.create_expression("E", a + 1)
        ctx.recalculate_all()
        assert a.needs_recalculation() is False

    def test_empty(self) -> None:
        assert EvaluationContext().recalculate_all() == {}
