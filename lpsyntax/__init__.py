"""
lpsyntax Python Package

Algebraic surface syntax for linear programs, compiled into a sparse,
matrix-oriented model ready for an LP solver.
"""

from .exceptions import LPSyntaxError, InvalidComparator, MalformedExpression
from .modeling import (
    Variable, ScaledTerm, LinearSum, Term, Sense, Comparator,
    SimpleForm, ChainedForm, normalize, variables, eq, le, ge, between, chain,
)
from .bounds import (
    BoundKind, BoundTriple, RowOrColumnSpec,
    resolve_comparator, classify_bounds,
)
from .model import LinearProgramModel, MatrixEntry, Direction
from .compiler import compile_model
from .parsing import (
    Problem, parse_expression, parse_comparator, parse_problem, load_problem,
    compile_problem, compile_text,
)
from .parameters import Parameters
from .results import Results
from .solver import solve

__version__ = "0.1.0"

__all__ = [
    'compile_model',
    'solve',
    'Parameters',
    'Results',
    'LinearProgramModel',
    'MatrixEntry',
    'Direction',
    '__version__',
    # Surface syntax
    'Variable',
    'ScaledTerm',
    'LinearSum',
    'Term',
    'Sense',
    'Comparator',
    'SimpleForm',
    'ChainedForm',
    'normalize',
    'variables',
    'eq',
    'le',
    'ge',
    'between',
    'chain',
    # Bounds
    'BoundKind',
    'BoundTriple',
    'RowOrColumnSpec',
    'resolve_comparator',
    'classify_bounds',
    # Text front-end
    'Problem',
    'parse_expression',
    'parse_comparator',
    'parse_problem',
    'load_problem',
    'compile_problem',
    'compile_text',
    # Errors
    'LPSyntaxError',
    'InvalidComparator',
    'MalformedExpression',
]
