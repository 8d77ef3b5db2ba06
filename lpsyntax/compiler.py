"""
Compiler from surface syntax to a matrix-oriented model

Example
-------
>>> from lpsyntax import compile_model, variables
>>> x, y = variables('x y')
>>> model = compile_model(
...     'maximize', 4*x + 7*y,
...     constraints=[x + y <= 10],
...     bounds=[x >= 0],
... )
>>> model.column_names
('x', 'y')
>>> model.entries
(MatrixEntry(row=1, column=1, coefficient=1), MatrixEntry(row=1, column=2, coefficient=1))
"""
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from .bounds import (
    BoundTriple, NameGenerator, RowOrColumnSpec,
    column_spec, free_column, resolve_comparator, row_spec,
)
from .exceptions import MalformedExpression
from .logging import get_logger
from .model import Direction, LinearProgramModel, MatrixEntry
from .modeling import ComparatorForm, Expression, SurfaceExpression, normalize
from .parameters import Parameters

logger = get_logger(__name__)


class ColumnIndex:
    """
    Ordered map from variable name to its 1-based column index.

    Built once per compile call from the objective; the first occurrence of
    a variable fixes its position.
    """

    def __init__(self):
        self._positions: Dict[str, int] = {}

    @classmethod
    def from_expression(cls, terms: Expression, allow_duplicates: bool = False) -> 'ColumnIndex':
        index = cls()
        for term in terms:
            if term.variable in index:
                if not allow_duplicates:
                    raise MalformedExpression(
                        f"Variable {term.variable} appears more than once in the objective"
                    )
                continue
            index.add(term.variable)
        return index

    def add(self, variable: str) -> int:
        if variable not in self._positions:
            self._positions[variable] = len(self._positions) + 1
        return self._positions[variable]

    def column(self, variable: str) -> int:
        """1-based column of ``variable``"""
        try:
            return self._positions[variable]
        except KeyError:
            raise MalformedExpression(
                f"Variable {variable} does not appear in the objective"
            ) from None

    @property
    def names(self) -> List[str]:
        return list(self._positions)

    def __contains__(self, variable) -> bool:
        return variable in self._positions

    def __iter__(self) -> Iterator[str]:
        return iter(self._positions)

    def __len__(self) -> int:
        return len(self._positions)

    def __repr__(self):
        return f"ColumnIndex({self.names})"


def _check_distinct(terms: Expression, where: str) -> None:
    seen = set()
    for term in terms:
        if term.variable in seen:
            raise MalformedExpression(f"Variable {term.variable} appears more than once in {where}")
        seen.add(term.variable)


def _column_specs(bound_triples: Sequence[BoundTriple], index: ColumnIndex,
                  check_contracts: bool) -> List[RowOrColumnSpec]:
    explicit: Dict[str, RowOrColumnSpec] = {}
    for triple in bound_triples:
        spec = column_spec(triple)
        if spec.name not in index:
            if check_contracts:
                raise MalformedExpression(
                    f"Bound on {spec.name}, which does not appear in the objective"
                )
            logger.warning("Dropping bound on %s: not in the objective", spec.name)
            continue
        if check_contracts and spec.name in explicit:
            raise MalformedExpression(f"Variable {spec.name} is bounded more than once")
        explicit[spec.name] = spec

    return [explicit.get(name) or free_column(name) for name in index]


def _matrix_entries(row_triples: Sequence[BoundTriple], index: ColumnIndex,
                    check_contracts: bool) -> List[MatrixEntry]:
    entries = []
    for row, triple in enumerate(row_triples, start=1):
        terms = normalize(triple.expression)
        if check_contracts:
            _check_distinct(terms, f"constraint {row}")
        for term in terms:
            entries.append(MatrixEntry(row, index.column(term.variable), term.coefficient))
    return entries


def compile_model(
    sense,
    objective: SurfaceExpression,
    constraints: Iterable[ComparatorForm] = (),
    bounds: Iterable[ComparatorForm] = (),
    parameters: Optional[Parameters] = None,
) -> LinearProgramModel:
    """
    Compile a linear program written in surface syntax.

    Column order is the order in which variables first appear in the
    objective. Every item of ``constraints`` becomes one row, in input
    order, even when it mentions a single variable; items of ``bounds``
    become column bounds. Variables without a bound are free.

    Parameters
    ----------
    sense : str or Sense
        'minimize' or 'maximize' (also 'min'/'max')
    objective : Variable, ScaledTerm, LinearSum or str
        Objective expression
    constraints : iterable of SimpleForm or ChainedForm
        Constraint rows
    bounds : iterable of SimpleForm or ChainedForm
        Bounds on single variables
    parameters : Parameters, optional
        Compiler parameters. If None, default parameters are used.

    Returns
    -------
    LinearProgramModel

    Raises
    ------
    InvalidComparator
        If any constraint or bound uses a comparator its shape does not allow
    MalformedExpression
        If the input breaks the expression contract
    """
    if parameters is None:
        parameters = Parameters()
    check = parameters.check_contracts

    direction = Direction.from_sense(sense)

    objective_terms = normalize(objective)
    index = ColumnIndex.from_expression(objective_terms, allow_duplicates=not check)

    row_triples = [resolve_comparator(form) for form in constraints]
    bound_triples = [resolve_comparator(form) for form in bounds]

    entries = _matrix_entries(row_triples, index, check)
    names = NameGenerator(parameters.row_name_prefix, reserved=index)
    rows = [row_spec(triple, names) for triple in row_triples]
    columns = _column_specs(bound_triples, index, check)
    objective_vector = [term.coefficient for term in objective_terms]

    logger.debug("Compiled %s model: %d rows, %d columns, %d non-zeros",
                 direction.name, len(rows), len(columns), len(entries))

    return LinearProgramModel(rows, columns, entries, objective_vector, direction)
