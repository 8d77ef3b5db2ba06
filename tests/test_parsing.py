"""
Tests for the text front-end.
"""

import pytest

from lpsyntax.bounds import BoundKind, RowOrColumnSpec, resolve_comparator
from lpsyntax.exceptions import InvalidComparator, MalformedExpression
from lpsyntax.model import Direction, MatrixEntry
from lpsyntax.modeling import (
    ChainedForm, Comparator, LinearSum, ScaledTerm, Sense, SimpleForm, Term,
    Variable, normalize,
)
from lpsyntax.parsing import (
    compile_text, load_problem, parse_comparator, parse_expression, parse_problem,
)


# ============================================================================
# Expressions
# ============================================================================

class TestParseExpression:

    def test_bare_variable(self):
        expr = parse_expression("x")
        assert isinstance(expr, Variable)
        assert expr.name == "x"

    def test_juxtaposed_and_starred_coefficients(self):
        expr = parse_expression("4x + 7*y")
        assert isinstance(expr, LinearSum)
        assert normalize(expr) == (Term(4, 'x'), Term(7, 'y'))

    def test_signs(self):
        assert normalize(parse_expression("-x + y - 2z")) == (
            Term(-1, 'x'), Term(1, 'y'), Term(-2, 'z'),
        )

    def test_unicode_minus(self):
        assert normalize(parse_expression("x − y")) == (Term(1, 'x'), Term(-1, 'y'))

    def test_decimal_and_exponent_coefficients(self):
        assert normalize(parse_expression("1.5 a + 2e3 b + .25c")) == (
            Term(1.5, 'a'), Term(2000.0, 'b'), Term(0.25, 'c'),
        )

    def test_names_with_digits_and_underscores(self):
        assert normalize(parse_expression("x_1 + 3 x2")) == (Term(1, 'x_1'), Term(3, 'x2'))

    def test_explicit_unit_coefficient_is_scaled(self):
        assert isinstance(parse_expression("1x"), ScaledTerm)

    @pytest.mark.parametrize("text", ["", "   ", "4", "x + 3", "x y", "x + * y", "*x"])
    def test_malformed(self, text):
        with pytest.raises(MalformedExpression):
            parse_expression(text)


# ============================================================================
# Comparators
# ============================================================================

class TestParseComparator:

    def test_simple(self):
        form = parse_comparator("x + y <= 10")
        assert isinstance(form, SimpleForm)
        assert form.operator is Comparator.LE
        assert form.value == 10
        assert normalize(form.expression) == (Term(1, 'x'), Term(1, 'y'))

    @pytest.mark.parametrize("text, operator", [
        ("x = 1", Comparator.EQ),
        ("x == 1", Comparator.EQ),
        ("x >= 1", Comparator.GE),
        ("x ≥ 1", Comparator.GE),
        ("x ≤ 1", Comparator.LE),
        ("x < 1", Comparator.LT),
        ("x > 1", Comparator.GT),
        ("x != 1", Comparator.NE),
        ("x ≠ 1", Comparator.NE),
    ])
    def test_operator_tokens(self, text, operator):
        assert parse_comparator(text).operator is operator

    def test_value_first_is_mirrored(self):
        form = parse_comparator("10 >= x")
        assert form.operator is Comparator.LE
        assert form.value == 10

    def test_negative_value(self):
        assert parse_comparator("x >= -2.5").value == -2.5

    def test_chained(self):
        le = parse_comparator("2 <= x <= 8")
        ge = parse_comparator("8 >= x >= 2")
        assert isinstance(le, ChainedForm) and isinstance(ge, ChainedForm)
        a, b = resolve_comparator(le), resolve_comparator(ge)
        assert (a.lower, a.upper) == (b.lower, b.upper) == (2, 8)

    @pytest.mark.parametrize("text", ["x < 3", "x > 3", "x != 3", "1 < x < 3", "1 = x = 3"])
    def test_rejected_on_resolution(self, text):
        form = parse_comparator(text)
        with pytest.raises(InvalidComparator):
            resolve_comparator(form)

    def test_mixed_chain(self):
        with pytest.raises(InvalidComparator):
            parse_comparator("2 <= x >= 1")

    @pytest.mark.parametrize("text", ["x + y", "x <= y", "1 <= 2", "1 <= x <= y", "1 <= x <= 2 <= 3"])
    def test_malformed(self, text):
        with pytest.raises(MalformedExpression):
            parse_comparator(text)


# ============================================================================
# Problems
# ============================================================================

PROBLEM = """
# small production plan
maximize 4x + 7y
subject to
    x + y <= 10      # capacity
bounds
    x >= 0
"""


class TestParseProblem:

    def test_sections(self):
        problem = parse_problem(PROBLEM)
        assert problem.sense is Sense.MAXIMIZE
        assert normalize(problem.objective) == (Term(4, 'x'), Term(7, 'y'))
        assert len(problem.constraints) == 1
        assert len(problem.bounds) == 1

    def test_compiles_like_expressions(self):
        model = compile_text(PROBLEM)
        assert model.direction is Direction.MAX
        assert model.column_names == ('x', 'y')
        assert model.rows == (RowOrColumnSpec('r1', BoundKind.UPPER, 0, 10),)
        assert model.columns == (
            RowOrColumnSpec('x', BoundKind.LOWER, 0, 0),
            RowOrColumnSpec('y', BoundKind.FREE, 0, 0),
        )
        assert set(model.entries) == {MatrixEntry(1, 1, 1), MatrixEntry(1, 2, 1)}
        assert model.objective == (4, 7)

    @pytest.mark.parametrize("header", ["max:", "MAX", "maximize", "Maximize:"])
    def test_objective_headers(self, header):
        assert parse_problem(f"{header} x + y").sense is Sense.MAXIMIZE

    @pytest.mark.parametrize("header", ["subject to", "Subject To:", "s.t.", "st"])
    def test_subject_to_headers(self, header):
        problem = parse_problem(f"min: x\n{header}\nx >= 1")
        assert len(problem.constraints) == 1

    def test_constraints_without_header(self):
        problem = parse_problem("min: x + y\nx + y >= 1\nbounds:\n0 <= x <= 3")
        assert len(problem.constraints) == 1
        assert len(problem.bounds) == 1

    def test_missing_objective(self):
        with pytest.raises(MalformedExpression):
            parse_problem("x + y <= 10")

    def test_empty(self):
        with pytest.raises(MalformedExpression):
            parse_problem("# nothing here\n\n")

    def test_invalid_comparator_aborts_compilation(self):
        with pytest.raises(InvalidComparator):
            compile_text("min: x + y\nx + y < 3")


class TestLoadProblem:

    def test_reads_file(self, tmp_path):
        path = tmp_path / "plan.lp"
        path.write_text(PROBLEM, encoding="utf-8")
        problem = load_problem(path)
        assert problem.sense is Sense.MAXIMIZE
        assert len(problem.constraints) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_problem(tmp_path / "missing.lp")
