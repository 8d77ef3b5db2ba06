"""
Results class for solver output
"""
import numpy as np
from typing import Optional, Dict, Any


class Results:
    """
    Results of solving a compiled model.

    Attributes
    ----------
    status : str
        Solver status ('OPTIMAL', 'ITER_LIMIT', 'INFEASIBLE', 'UNBOUNDED', 'ERROR')
    x : np.ndarray
        Primal solution vector, in column order
    primal_obj : float
        Objective value c'*x, in the model's own direction
    row_activity : np.ndarray
        A*x, in row order
    values : dict
        Column name to solution value
    iter : int
        Total number of iterations
    time : float
        Total solve time in seconds
    message : str
        Backend message

    Methods
    -------
    is_optimal()
        Check if solution is optimal
    to_dict()
        Convert results to dictionary
    """

    def __init__(self):
        self.status: str = "UNKNOWN"
        self.x: Optional[np.ndarray] = None
        self.primal_obj: float = float('nan')
        self.row_activity: Optional[np.ndarray] = None
        self.values: Dict[str, float] = {}
        self.iter: int = 0
        self.time: float = 0.0
        self.message: str = ""

    def is_optimal(self) -> bool:
        """Check if solution is optimal"""
        return self.status == "OPTIMAL"

    def __getitem__(self, name: str) -> float:
        return self.values[name]

    def __repr__(self):
        if self.x is not None:
            n_vars = len(self.x)
        else:
            n_vars = 0

        return (f"Results(status='{self.status}', "
                f"primal_obj={self.primal_obj:.6g}, "
                f"iter={self.iter}, "
                f"n_vars={n_vars})")

    def __str__(self):
        lines = [
            "LP Results",
            "=" * 50,
            f"Status:          {self.status}",
            f"Primal Obj:      {self.primal_obj:.6e}",
            f"Iterations:      {self.iter}",
            f"Time:            {self.time:.3f} seconds",
        ]
        for name, value in self.values.items():
            lines.append(f"  {name:<15}{value:.6g}")
        if self.message:
            lines.append(f"Message:         {self.message}")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert results to dictionary"""
        return {
            'status': self.status,
            'x': self.x.tolist() if self.x is not None else None,
            'primal_obj': self.primal_obj,
            'row_activity': self.row_activity.tolist() if self.row_activity is not None else None,
            'values': dict(self.values),
            'iter': self.iter,
            'time': self.time,
            'message': self.message,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]):
        """Create Results from dictionary"""
        results = cls()
        for key, value in d.items():
            if key in ['x', 'row_activity'] and value is not None:
                setattr(results, key, np.array(value, dtype=np.float64))
            elif hasattr(results, key):
                setattr(results, key, value)
        return results
