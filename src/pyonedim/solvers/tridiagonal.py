import numpy as np
from typing import Tuple


def solve_tridiagonal(a: np.ndarray, b: np.ndarray, c: np.ndarray,
                      rhs: np.ndarray) -> np.ndarray:
    """
    Solve a tridiagonal system by forward elimination and back substitution
    (Thomas algorithm).

    Args:
        a: Lower diagonal, a[i] multiplies y[i-1] (a[0] unused)
        b: Main diagonal
        c: Upper diagonal, c[i] multiplies y[i+1] (c[-1] unused)
        rhs: Right-hand side

    Returns:
        np.ndarray: Solution vector
    """
    N = len(b)
    lu_b, lu_d = _eliminate(np.asarray(a, dtype=float), np.asarray(b, dtype=float),
                            np.asarray(c, dtype=float), np.asarray(rhs, dtype=float))

    # Back substitution
    y = np.zeros(N)
    y[N-1] = lu_d[N-1] / lu_b[N-1]
    for i in range(N-2, -1, -1):
        y[i] = (lu_d[i] - c[i] * y[i+1]) / lu_b[i]
    return y


def _eliminate(a: np.ndarray, b: np.ndarray, c: np.ndarray,
               rhs: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Forward elimination, returns the modified diagonal and right-hand side"""
    N = len(b)
    lu_b = b.copy()
    lu_d = rhs.copy()
    for i in range(1, N):
        m = a[i] / lu_b[i-1]
        lu_b[i] = lu_b[i] - m * c[i-1]
        lu_d[i] = lu_d[i] - m * lu_d[i-1]
    return lu_b, lu_d
