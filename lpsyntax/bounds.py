"""
Bound resolution for constraints and variables

Comparator forms are resolved into ``(expression, lower, upper)`` triples,
classified into one of five bound kinds and turned into the row and column
records of the compiled model.
"""
from enum import IntEnum
from typing import Iterable, NamedTuple, Optional

from .exceptions import InvalidComparator, MalformedExpression
from .logging import get_logger
from .modeling import (
    ChainedForm, Comparator, ComparatorForm, SimpleForm, SurfaceExpression,
    is_bare_variable, normalize, variable_name,
)

logger = get_logger(__name__)


class BoundKind(IntEnum):
    """How a row or column is bounded, in GLPK-style integer codes"""
    FREE = 1     # -inf < x < +inf
    LOWER = 2    # lb <= x < +inf
    UPPER = 3    # -inf < x <= ub
    DOUBLE = 4   # lb <= x <= ub
    FIXED = 5    # x = lb = ub


class BoundTriple(NamedTuple):
    """A resolved comparator; ``None`` marks an absent side"""
    expression: SurfaceExpression
    lower: Optional[float]
    upper: Optional[float]


class RowOrColumnSpec(NamedTuple):
    """
    Row or column metadata of the compiled model.

    Absent sides are stored as 0; ``kind`` tells which of ``lower`` and
    ``upper`` are meaningful.
    """
    name: str
    kind: BoundKind
    lower: float
    upper: float


def resolve_comparator(form: ComparatorForm) -> BoundTriple:
    """
    Resolve a simple or chained comparator form into a bound triple.

    ============  ========  =======  =======
    shape         operator  lower    upper
    ============  ========  =======  =======
    simple        =         value    value
    simple        <=        --       value
    simple        >=        value    --
    chained       <=        value1   value2
    chained       >=        value2   value1
    ============  ========  =======  =======

    Raises
    ------
    InvalidComparator
        For any other operator
    MalformedExpression
        If ``form`` is not a comparator form
    """
    if isinstance(form, SimpleForm):
        if form.operator is Comparator.EQ:
            return BoundTriple(form.expression, form.value, form.value)
        if form.operator is Comparator.LE:
            return BoundTriple(form.expression, None, form.value)
        if form.operator is Comparator.GE:
            return BoundTriple(form.expression, form.value, None)
        raise InvalidComparator(form.operator.value, form.shape)

    if isinstance(form, ChainedForm):
        if form.operator is Comparator.LE:
            return BoundTriple(form.expression, form.value1, form.value2)
        if form.operator is Comparator.GE:
            # value1 >= expr >= value2 reads right to left
            return BoundTriple(form.expression, form.value2, form.value1)
        raise InvalidComparator(form.operator.value, form.shape)

    raise MalformedExpression(f"Not a comparator form: {form!r}")


def classify_bounds(lower: Optional[float], upper: Optional[float]) -> BoundKind:
    """Map the presence pattern of ``(lower, upper)`` to a bound kind"""
    if lower is not None and upper is not None:
        return BoundKind.FIXED if lower == upper else BoundKind.DOUBLE
    if lower is not None:
        return BoundKind.LOWER
    if upper is not None:
        return BoundKind.UPPER
    return BoundKind.FREE


class NameGenerator:
    """
    Generates row names unique within one compile call.

    Names are ``prefix`` followed by a counter starting at 1; any name in
    ``reserved`` is skipped.
    """

    def __init__(self, prefix: str = 'r', reserved: Iterable[str] = ()):
        self.prefix = prefix
        self._reserved = set(reserved)
        self._count = 0

    def __call__(self) -> str:
        while True:
            self._count += 1
            name = f"{self.prefix}{self._count}"
            if name not in self._reserved:
                self._reserved.add(name)
                return name


def _make_spec(name: str, lower: Optional[float], upper: Optional[float]) -> RowOrColumnSpec:
    kind = classify_bounds(lower, upper)
    if kind is BoundKind.DOUBLE and lower > upper:
        logger.warning("Bounds of %s are inverted (%s > %s); the model is infeasible",
                       name, lower, upper)
    return RowOrColumnSpec(
        name,
        kind,
        0 if lower is None else lower,
        0 if upper is None else upper,
    )


def row_spec(triple: BoundTriple, names: NameGenerator) -> RowOrColumnSpec:
    """
    Materialize a constraint row.

    The row is named after its variable when the constraint is a bare
    variable, otherwise ``names`` supplies a fresh name. Bounds are stored as
    written; the coefficients stay in the matrix.
    """
    if is_bare_variable(triple.expression):
        name = variable_name(triple.expression)
    else:
        name = names()
    return _make_spec(name, triple.lower, triple.upper)


def column_spec(triple: BoundTriple) -> RowOrColumnSpec:
    """
    Materialize a variable bound.

    The bound expression must contain exactly one variable. A coefficient
    other than 1 is divided out of both bounds, so ``2x <= 20`` becomes
    ``x <= 10``; a negative coefficient also swaps the sides.

    Raises
    ------
    MalformedExpression
        If the expression has more than one term or a zero coefficient
    """
    terms = normalize(triple.expression)
    if len(terms) != 1:
        raise MalformedExpression(
            f"A variable bound must involve exactly one variable, got {triple.expression!r}"
        )
    coefficient, variable = terms[0]
    lower, upper = triple.lower, triple.upper

    if coefficient == 0:
        raise MalformedExpression(f"Bound on {variable} has a zero coefficient")
    if coefficient != 1:
        lower = None if lower is None else lower / coefficient
        upper = None if upper is None else upper / coefficient
        if coefficient < 0:
            lower, upper = upper, lower

    return _make_spec(variable, lower, upper)


def free_column(name: str) -> RowOrColumnSpec:
    """Column of a variable without an explicit bound"""
    return RowOrColumnSpec(name, BoundKind.FREE, 0, 0)
