"""
Parameters class for compiling and solving
"""

class Parameters:
    """
    Configuration parameters for the compiler and the solver bridge.

    Attributes
    ----------
    row_name_prefix : str
        Prefix of generated row names (default: 'r')
    check_contracts : bool
        Detect duplicate variables, duplicate bounds and bounds on
        variables missing from the objective (default: True)
    method : str
        ``scipy.optimize.linprog`` method (default: 'highs')
    time_limit : float or None
        Maximum solve time in seconds (default: None, no limit)
    max_iter : int or None
        Maximum number of iterations (default: None, backend default)
    presolve : bool
        Enable the backend presolve (default: True)

    Examples
    --------
    >>> param = Parameters()
    >>> param.row_name_prefix = 'c'
    >>> param.time_limit = 10.0
    """

    def __init__(self):
        self.row_name_prefix = 'r'
        self.check_contracts = True
        self.method = 'highs'
        self.time_limit = None
        self.max_iter = None
        self.presolve = True

    def __repr__(self):
        return (f"Parameters(row_name_prefix={self.row_name_prefix!r}, "
                f"check_contracts={self.check_contracts}, "
                f"method={self.method!r}, "
                f"time_limit={self.time_limit})")

    def to_linprog_options(self):
        """Options dictionary for ``scipy.optimize.linprog``"""
        options = {'presolve': self.presolve}
        if self.time_limit is not None:
            options['time_limit'] = float(self.time_limit)
        if self.max_iter is not None:
            options['maxiter'] = int(self.max_iter)
        return options

    @classmethod
    def from_dict(cls, d):
        """Create Parameters from dictionary"""
        param = cls()
        for key, value in d.items():
            if hasattr(param, key):
                setattr(param, key, value)
        return param

    def to_dict(self):
        """Convert to dictionary"""
        return {
            'row_name_prefix': self.row_name_prefix,
            'check_contracts': self.check_contracts,
            'method': self.method,
            'time_limit': self.time_limit,
            'max_iter': self.max_iter,
            'presolve': self.presolve,
        }
