"""
Surface syntax for linear programs

This module provides the algebraic building blocks users write linear
programs with: bare variables, scaled variables and sums of them, plus the
two comparator shapes used for constraints and bounds. Expressions are kept
in the shape they were written in; ``normalize`` turns any of them into the
flat sequence of ``(coefficient, variable)`` terms the compiler works on.

Example
-------
>>> from lpsyntax.modeling import variables, between, normalize
>>> x, y = variables('x y')
>>> objective = 4*x + 7*y
>>> capacity = x + y <= 10
>>> box = between(2, x, 8)      # 2 <= x <= 8
>>> normalize(objective)
(Term(coefficient=4, variable='x'), Term(coefficient=7, variable='y'))
"""

import numpy as np
from typing import Iterable, NamedTuple, Tuple, Union
from enum import Enum

from .exceptions import MalformedExpression


_SCALAR_TYPES = (int, float, np.number)


def _is_scalar(value) -> bool:
    return isinstance(value, _SCALAR_TYPES) and not isinstance(value, bool)


class Sense(Enum):
    """Optimization sense, as written in the surface syntax"""
    MINIMIZE = 'minimize'
    MAXIMIZE = 'maximize'

    @classmethod
    def parse(cls, value: Union[str, 'Sense']) -> 'Sense':
        """Accept a Sense or one of 'min', 'max', 'minimize', 'maximize'"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key in ('min', 'minimize'):
                return cls.MINIMIZE
            if key in ('max', 'maximize'):
                return cls.MAXIMIZE
        raise ValueError(f"Unknown optimization sense: {value!r}")


class Comparator(Enum):
    """
    Comparator tokens of the surface syntax.

    Only ``EQ``, ``LE`` and ``GE`` compile; the strict and negated tokens
    exist so that they can be written, and rejected when resolved.
    """
    EQ = '='
    LE = '<='
    GE = '>='
    LT = '<'
    GT = '>'
    NE = '!='


class Term(NamedTuple):
    """One normalized ``coefficient * variable`` pair"""
    coefficient: float
    variable: str


# A normalized expression: terms in the order they were written
Expression = Tuple[Term, ...]


class _LinearForm:
    """Arithmetic and comparison operators shared by all expression shapes"""

    # numpy scalars defer to the reflected operators below
    __array_ufunc__ = None

    def _addends(self) -> Tuple['_LinearForm', ...]:
        return (self,)

    def _scaled(self, scalar) -> '_LinearForm':
        raise NotImplementedError

    # Arithmetic operations
    def __add__(self, other):
        if isinstance(other, str):
            other = Variable(other)
        if isinstance(other, _LinearForm):
            return LinearSum(self._addends() + other._addends())
        if _is_scalar(other):
            raise TypeError("Constant terms are not supported in linear expressions")
        return NotImplemented

    def __radd__(self, other):
        # sum() starts from 0
        if _is_scalar(other) and other == 0:
            return self
        if isinstance(other, str):
            return LinearSum((Variable(other),) + self._addends())
        return self.__add__(other)

    def __sub__(self, other):
        if isinstance(other, str):
            other = Variable(other)
        if isinstance(other, _LinearForm):
            return self + other._scaled(-1)
        if _is_scalar(other):
            raise TypeError("Constant terms are not supported in linear expressions")
        return NotImplemented

    def __rsub__(self, other):
        if isinstance(other, str):
            return Variable(other) - self
        raise TypeError("Constant terms are not supported in linear expressions")

    def __mul__(self, other):
        if _is_scalar(other):
            return self._scaled(other)
        raise TypeError("Can only multiply expression by scalar (no quadratic terms)")

    def __rmul__(self, other):
        return self.__mul__(other)

    def __neg__(self):
        return self._scaled(-1)

    def __truediv__(self, other):
        if not _is_scalar(other):
            raise TypeError("Can only divide expression by scalar")
        return self._scaled(1.0 / float(other))

    # Comparison operators build simple comparator forms
    def _compare(self, operator: 'Comparator', other) -> 'SimpleForm':
        if not _is_scalar(other):
            raise TypeError("Right-hand side of a comparison must be a number")
        return SimpleForm(operator, self, other)

    def __le__(self, other):
        return self._compare(Comparator.LE, other)

    def __ge__(self, other):
        return self._compare(Comparator.GE, other)

    def __eq__(self, other):
        return self._compare(Comparator.EQ, other)

    def __lt__(self, other):
        return self._compare(Comparator.LT, other)

    def __gt__(self, other):
        return self._compare(Comparator.GT, other)

    def __ne__(self, other):
        return self._compare(Comparator.NE, other)

    __hash__ = None


class Variable(_LinearForm):
    """
    A bare variable token.

    Parameters
    ----------
    name : str
        Name of the variable; it becomes the column name in the compiled model

    Examples
    --------
    >>> x = Variable('x')
    >>> 3*x
    ScaledTerm(3, x)
    """

    def __init__(self, name: str):
        if not isinstance(name, str) or not name:
            raise TypeError("Variable name must be a non-empty string")
        self.name = name

    def _scaled(self, scalar):
        return ScaledTerm(scalar, self.name)

    def __repr__(self):
        return f"Variable({self.name})"

    def __str__(self):
        return self.name


class ScaledTerm(_LinearForm):
    """
    A variable with an explicit coefficient.

    Parameters
    ----------
    coefficient : float
        Coefficient of the variable
    variable : Variable or str
        The scaled variable
    """

    def __init__(self, coefficient, variable: Union['Variable', str]):
        if not _is_scalar(coefficient):
            raise TypeError("Coefficient must be a number")
        self.coefficient = coefficient
        self.variable = variable_name(variable)

    def _scaled(self, scalar):
        return ScaledTerm(scalar * self.coefficient, self.variable)

    def __repr__(self):
        return f"ScaledTerm({self.coefficient}, {self.variable})"


class LinearSum(_LinearForm):
    """
    A sum of bare and scaled variables, kept in left-to-right order.

    Nested sums are flattened. Terms for the same variable are not merged.
    """

    def __init__(self, terms: Iterable[Union['Variable', 'ScaledTerm', 'LinearSum', str]]):
        addends = []
        for term in terms:
            if isinstance(term, str):
                term = Variable(term)
            if not isinstance(term, _LinearForm):
                raise TypeError(f"Cannot add {type(term).__name__} to a linear sum")
            addends.extend(term._addends())
        self.terms = tuple(addends)

    def _addends(self):
        return self.terms

    def _scaled(self, scalar):
        return LinearSum(term._scaled(scalar) for term in self.terms)

    def __repr__(self):
        return "LinearSum(" + ", ".join(repr(t) for t in self.terms) + ")"


SurfaceExpression = Union[Variable, ScaledTerm, LinearSum, str]


def variable_name(variable) -> str:
    if isinstance(variable, Variable):
        return variable.name
    if isinstance(variable, str) and variable:
        return variable
    raise MalformedExpression(f"Expected a variable, got {variable!r}")


def normalize(expression: SurfaceExpression) -> Expression:
    """
    Rewrite a surface expression into an ordered sequence of terms.

    A bare variable gets coefficient 1, a scaled variable is kept as written,
    and a sum yields one term per addend in left-to-right order.

    Parameters
    ----------
    expression : Variable, ScaledTerm, LinearSum or str

    Returns
    -------
    tuple of Term
    """
    if isinstance(expression, (Variable, str)):
        return (Term(1, variable_name(expression)),)
    if isinstance(expression, ScaledTerm):
        return (Term(expression.coefficient, expression.variable),)
    if isinstance(expression, LinearSum):
        return tuple(term for addend in expression.terms for term in normalize(addend))
    raise MalformedExpression(f"Not a linear expression: {expression!r}")


def is_bare_variable(expression) -> bool:
    """True when the expression is a single variable token without coefficient"""
    return isinstance(expression, Variable) or (isinstance(expression, str) and bool(expression))


class SimpleForm:
    """
    Two-operand comparator: ``expression OPERATOR value``.

    Created by the comparison operators of expressions, or by ``eq``, ``le``
    and ``ge``.
    """
    shape = 'simple'

    def __init__(self, operator: Comparator, expression: SurfaceExpression, value):
        self.operator = Comparator(operator)
        self.expression = expression
        self.value = value

    def __bool__(self):
        raise TypeError(
            "A comparison has no truth value. Python's chained comparisons do "
            "not build double bounds; use between(lower, expr, upper)"
        )

    def __repr__(self):
        return f"SimpleForm({self.expression!r} {self.operator.value} {self.value})"


class ChainedForm:
    """
    Four-operand comparator: ``value1 OPERATOR expression OPERATOR value2``.

    Examples
    --------
    >>> x = Variable('x')
    >>> chain('<=', 2, x, 8)    # 2 <= x <= 8
    >>> chain('>=', 8, x, 2)    # 8 >= x >= 2, the same bound
    """
    shape = 'chained'

    def __init__(self, operator: Comparator, value1, expression: SurfaceExpression, value2):
        self.operator = Comparator(operator)
        self.value1 = value1
        self.expression = expression
        self.value2 = value2

    def __repr__(self):
        op = self.operator.value
        return f"ChainedForm({self.value1} {op} {self.expression!r} {op} {self.value2})"


ComparatorForm = Union[SimpleForm, ChainedForm]


def eq(expr: SurfaceExpression, value) -> SimpleForm:
    """``expr = value``"""
    return SimpleForm(Comparator.EQ, expr, value)


def le(expr: SurfaceExpression, value) -> SimpleForm:
    """``expr <= value``"""
    return SimpleForm(Comparator.LE, expr, value)


def ge(expr: SurfaceExpression, value) -> SimpleForm:
    """``expr >= value``"""
    return SimpleForm(Comparator.GE, expr, value)


def chain(operator: Union[str, Comparator], value1, expr: SurfaceExpression,
          value2) -> ChainedForm:
    """``value1 OPERATOR expr OPERATOR value2``"""
    return ChainedForm(Comparator(operator), value1, expr, value2)


def between(lower, expr: SurfaceExpression, upper) -> ChainedForm:
    """
    Create a two-sided bound: lower <= expr <= upper.

    Python's comparison chaining doesn't work for custom objects, so use this helper.

    Examples
    --------
    >>> x = Variable('x')
    >>> c = between(5, 2*x, 10)  # 5 <= 2*x <= 10
    """
    return ChainedForm(Comparator.LE, lower, expr, upper)


def variables(names: Union[str, Iterable[str]]) -> Tuple[Variable, ...]:
    """
    Create several variables at once.

    Examples
    --------
    >>> x, y, z = variables('x y z')
    >>> a, b = variables(['a', 'b'])
    """
    if isinstance(names, str):
        names = names.replace(',', ' ').split()
    return tuple(Variable(name) for name in names)
