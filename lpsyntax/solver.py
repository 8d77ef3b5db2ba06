"""
Solver interface for compiled models

The numeric work is done by ``scipy.optimize.linprog``; this module only
translates a ``LinearProgramModel`` into its calling convention and the
answer back into ``Results``.
"""
import time
import numpy as np
from scipy import sparse
from scipy.optimize import linprog
from typing import List, Optional, Tuple

from .logging import get_logger
from .model import Direction, LinearProgramModel
from .parameters import Parameters
from .results import Results

logger = get_logger(__name__)

# scipy.optimize.linprog status codes
_STATUS = {
    0: "OPTIMAL",
    1: "ITER_LIMIT",
    2: "INFEASIBLE",
    3: "UNBOUNDED",
    4: "ERROR",
}


def _split_rows(A: sparse.csr_matrix, AL: np.ndarray, AU: np.ndarray):
    """
    Rewrite AL <= A*x <= AU as A_ub*x <= b_ub and A_eq*x == b_eq.

    Equal finite bounds give an equality row; every other finite side gives
    one inequality row (lower sides are negated).
    """
    equal = np.isfinite(AL) & (AL == AU)
    upper = np.isfinite(AU) & ~equal
    lower = np.isfinite(AL) & ~equal

    A_eq = b_eq = None
    if equal.any():
        A_eq = A[np.flatnonzero(equal)]
        b_eq = AU[equal]

    A_ub = b_ub = None
    if upper.any() or lower.any():
        A_ub = sparse.vstack([A[np.flatnonzero(upper)], -A[np.flatnonzero(lower)]]).tocsr()
        b_ub = np.concatenate([AU[upper], -AL[lower]])

    return A_ub, b_ub, A_eq, b_eq


def _column_bounds(l: np.ndarray, u: np.ndarray) -> List[Tuple[Optional[float], Optional[float]]]:
    return [
        (float(lo) if np.isfinite(lo) else None, float(hi) if np.isfinite(hi) else None)
        for lo, hi in zip(l, u)
    ]


def solve(model: LinearProgramModel, parameters: Optional[Parameters] = None) -> Results:
    """
    Solve a compiled model.

    Parameters
    ----------
    model : LinearProgramModel
        Model produced by ``compile_model``
    parameters : Parameters, optional
        Solver parameters. If None, default parameters are used.

    Returns
    -------
    Results
        Solver results, with the objective in the model's own direction

    Examples
    --------
    >>> from lpsyntax import compile_text, solve
    >>> model = compile_text('''
    ...     maximize 4x + 7y
    ...     subject to
    ...         x + y <= 10
    ...     bounds
    ...         x >= 0
    ... ''')
    >>> result = solve(model)
    >>> result['y']
    10.0
    """
    if parameters is None:
        parameters = Parameters()

    if model.n == 0:
        raise ValueError("Model has no columns")

    A, AL, AU, l, u, c = model.to_arrays()

    # linprog minimizes
    sign = -1.0 if model.direction is Direction.MAX else 1.0

    A_ub, b_ub, A_eq, b_eq = _split_rows(A, AL, AU)

    start = time.perf_counter()
    res = linprog(
        sign * c,
        A_ub=A_ub, b_ub=b_ub,
        A_eq=A_eq, b_eq=b_eq,
        bounds=_column_bounds(l, u),
        method=parameters.method,
        options=parameters.to_linprog_options(),
    )
    elapsed = time.perf_counter() - start

    results = Results()
    results.status = _STATUS.get(res.status, "ERROR")
    results.message = str(res.message)
    results.iter = int(getattr(res, 'nit', 0) or 0)
    results.time = elapsed

    if res.x is not None:
        results.x = np.asarray(res.x, dtype=np.float64)
        results.primal_obj = float(c @ results.x)
        results.row_activity = A @ results.x
        results.values = dict(zip(model.column_names, results.x.tolist()))

    logger.info("linprog finished with status %s in %.3fs", results.status, elapsed)
    return results
