"""
Text front-end for the surface syntax

Reads linear programs written as plain text::

    maximize 4x + 7y
    subject to
        x + y <= 10
        2 <= x - y <= 8
    bounds
        x >= 0

Coefficients may be juxtaposed (``4x``) or joined with ``*`` (``4*x``).
``#`` starts a comment.
"""
import re
from pathlib import Path
from typing import List, NamedTuple, Optional, Union

from .compiler import compile_model
from .exceptions import InvalidComparator, MalformedExpression
from .model import LinearProgramModel
from .modeling import (
    ChainedForm, Comparator, ComparatorForm, LinearSum, ScaledTerm, Sense,
    SimpleForm, SurfaceExpression, Variable,
)
from .parameters import Parameters


_NUMBER = r"(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
_NUMBER_RE = re.compile(rf"\s*([+-]?)\s*({_NUMBER})\s*")
_TERM_RE = re.compile(
    rf"\s*(?P<sign>[+-])?\s*(?P<coef>{_NUMBER})?\s*(?P<star>\*)?\s*"
    r"(?P<var>[A-Za-z_][A-Za-z_0-9]*)?\s*"
)
_OPERATOR_RE = re.compile(r"(<=|>=|==|!=|≤|≥|≠|=|<|>)")
_OBJECTIVE_RE = re.compile(r"(?i)^(max(?:imize)?|min(?:imize)?)\b\s*:?\s*(.*)$")
_SUBJECT_TO_RE = re.compile(r"(?i)^(subject\s+to|s\.?t\.?)\s*:?$")
_BOUNDS_RE = re.compile(r"(?i)^bounds?\s*:?$")

_OPERATORS = {
    '=': Comparator.EQ,
    '==': Comparator.EQ,
    '<=': Comparator.LE,
    '≤': Comparator.LE,
    '>=': Comparator.GE,
    '≥': Comparator.GE,
    '<': Comparator.LT,
    '>': Comparator.GT,
    '!=': Comparator.NE,
    '≠': Comparator.NE,
}

# Operator seen from the other side: 10 >= x is x <= 10
_MIRRORED = {
    Comparator.EQ: Comparator.EQ,
    Comparator.NE: Comparator.NE,
    Comparator.LE: Comparator.GE,
    Comparator.GE: Comparator.LE,
    Comparator.LT: Comparator.GT,
    Comparator.GT: Comparator.LT,
}


class Problem(NamedTuple):
    """A parsed linear program, still in surface syntax"""
    sense: Sense
    objective: SurfaceExpression
    constraints: List[ComparatorForm]
    bounds: List[ComparatorForm]


def _to_number(sign: str, digits: str):
    value = int(digits) if digits.isdigit() else float(digits)
    return -value if sign == '-' else value


def _parse_number(text: str):
    m = _NUMBER_RE.fullmatch(text)
    if not m:
        return None
    return _to_number(*m.groups())


def _clean(text: str) -> str:
    return text.replace("−", "-")


def parse_expression(text: str) -> SurfaceExpression:
    """
    Parse a linear expression such as ``4x + 7*y - z``.

    Unsigned terms without a coefficient become bare ``Variable``s; every
    other term becomes a ``ScaledTerm``. Several terms make a ``LinearSum``.

    Raises
    ------
    MalformedExpression
        On empty input, constant terms or unparseable text
    """
    text = _clean(text)
    if not text.strip():
        raise MalformedExpression("Empty expression")

    addends = []
    pos = 0
    while pos < len(text):
        m = _TERM_RE.match(text, pos)
        sign, coef, star, var = m.group('sign', 'coef', 'star', 'var')
        if m.end() == pos or (addends and sign is None):
            raise MalformedExpression(f"Cannot parse linear term at {text[pos:]!r} inside {text!r}")
        if var is None:
            if coef is not None:
                raise MalformedExpression(f"Constant terms are not supported: {text!r}")
            raise MalformedExpression(f"Cannot parse linear term at {text[pos:]!r} inside {text!r}")
        if star is not None and coef is None:
            raise MalformedExpression(f"Missing coefficient before '*' in {text!r}")

        if coef is not None:
            addends.append(ScaledTerm(_to_number(sign or '+', coef), var))
        elif sign == '-':
            addends.append(ScaledTerm(-1, var))
        else:
            addends.append(Variable(var))
        pos = m.end()

    if len(addends) == 1:
        return addends[0]
    return LinearSum(addends)


def parse_comparator(text: str) -> ComparatorForm:
    """
    Parse a constraint or bound.

    One operator gives a ``SimpleForm``; a number on the left is moved to the
    right, mirroring the operator (``10 >= x`` is ``x <= 10``). Two operators
    give a ``ChainedForm`` (``2 <= x <= 8``, ``8 >= x >= 2``).

    Operators are not validated here beyond their shape; ``<``, ``>`` and
    ``!=`` are rejected when the form is resolved.

    Raises
    ------
    InvalidComparator
        If a chained form mixes two different operators
    MalformedExpression
        If the text is not a comparison of an expression and numbers
    """
    text = _clean(text)
    parts = _OPERATOR_RE.split(text)

    if len(parts) == 3:
        left, token, right = parts
        operator = _OPERATORS[token]
        value = _parse_number(right)
        if value is not None:
            return SimpleForm(operator, parse_expression(left), value)
        value = _parse_number(left)
        if value is not None:
            return SimpleForm(_MIRRORED[operator], parse_expression(right), value)
        raise MalformedExpression(f"One side of {text!r} must be a number")

    if len(parts) == 5:
        left, token1, middle, token2, right = parts
        if _OPERATORS[token1] is not _OPERATORS[token2]:
            raise InvalidComparator(
                f"{token1} ... {token2}", 'chained',
                f"Chained comparison {text!r} mixes operators {token1!r} and {token2!r}",
            )
        value1, value2 = _parse_number(left), _parse_number(right)
        if value1 is None or value2 is None:
            raise MalformedExpression(f"Both outer sides of {text!r} must be numbers")
        return ChainedForm(_OPERATORS[token1], value1, parse_expression(middle), value2)

    raise MalformedExpression(f"Expected one or two comparison operators in {text!r}")


def parse_problem(text: str) -> Problem:
    """
    Parse a complete linear program.

    The first line holds the objective (``max: ...``, ``minimize ...``).
    Constraint lines follow, optionally after a ``subject to`` header; lines
    after a ``bounds`` header are variable bounds.
    """
    lines = []
    for raw in text.splitlines():
        line = raw.split('#', 1)[0].strip()
        if line:
            lines.append(line)

    if not lines:
        raise MalformedExpression("Input is empty")

    m = _OBJECTIVE_RE.match(lines[0])
    if not m or not m.group(2):
        raise MalformedExpression(
            f"First line must be the objective, e.g. 'max: 4x + 7y', got {lines[0]!r}"
        )
    sense = Sense.parse(m.group(1))
    objective = parse_expression(m.group(2))

    constraints: List[ComparatorForm] = []
    bounds: List[ComparatorForm] = []
    target = constraints
    for line in lines[1:]:
        if _SUBJECT_TO_RE.match(line):
            target = constraints
        elif _BOUNDS_RE.match(line):
            target = bounds
        else:
            target.append(parse_comparator(line))

    return Problem(sense, objective, constraints, bounds)


def load_problem(filename: Union[str, Path]) -> Problem:
    """Parse a linear program from a text file"""
    path = Path(filename)
    if not path.exists():
        raise FileNotFoundError(f"LP file not found: {filename}")
    return parse_problem(path.read_text(encoding='utf-8'))


def compile_problem(problem: Problem, parameters: Optional[Parameters] = None) -> LinearProgramModel:
    """Compile a parsed problem"""
    return compile_model(problem.sense, problem.objective, problem.constraints,
                         problem.bounds, parameters)


def compile_text(text: str, parameters: Optional[Parameters] = None) -> LinearProgramModel:
    """Parse and compile a linear program in one step"""
    return compile_problem(parse_problem(text), parameters)
