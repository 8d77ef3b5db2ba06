"""
Exceptions raised while compiling linear programs
"""
from typing import Optional


class LPSyntaxError(ValueError):
    """Base class for all compilation errors"""


class InvalidComparator(LPSyntaxError):
    """
    A constraint or bound uses an operator the given form does not allow.

    Simple forms accept ``=``, ``<=`` and ``>=``; chained forms accept
    ``<=`` and ``>=`` only.

    Parameters
    ----------
    operator : str
        The offending operator token
    shape : str
        ``'simple'`` or ``'chained'``
    """

    def __init__(self, operator: str, shape: str, message: Optional[str] = None):
        self.operator = operator
        self.shape = shape
        if message is None:
            message = f"Operator {operator!r} is not allowed in a {shape} comparator"
        super().__init__(message)


class MalformedExpression(LPSyntaxError):
    """An expression, constraint or bound breaks the input contract"""
