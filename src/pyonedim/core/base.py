"""
Base classes and interfaces for PyOneDim components.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import numpy as np

class OneDimComponent(ABC):
    """
    Base class for all PyOneDim components. Holds an optional dictionary of
    options and tracks whether the component is ready for use.
    """
    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self._config = config or {}
        self._initialized = False

    @abstractmethod
    def initialize(self) -> None:
        """Prepare the component with its current options."""
        self._initialized = True

    def is_initialized(self) -> bool:
        return self._initialized

class GridComponent(OneDimComponent):
    """Base class for grid-related components."""
    @abstractmethod
    def update_grid_metrics(self) -> None:
        """Recompute interval widths and cell sizes from the point coordinates."""
        pass

class TransportComponent(OneDimComponent):
    """Base class for property and transport components."""
    @abstractmethod
    def compute_properties(self, x, j0: int, j1: int) -> None:
        """Compute properties over the point window [j0, j1]."""
        pass

class ResidualComponent(OneDimComponent):
    """
    Base class for domains that evaluate residual equations.

    A domain stores ``n_vars`` components at each of its ``n_points`` grid
    points. Inside a composite solution vector its block starts at offset
    ``loc`` and its first point has the global index ``first_point``.
    """
    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.loc = 0
        self.first_point = 0
        self.n_points = 0
        self.n_vars = 0

    @property
    def size(self) -> int:
        return self.n_points * self.n_vars

    @property
    def last_point(self) -> int:
        return self.first_point + self.n_points - 1

    def local_view(self, xg: np.ndarray) -> np.ndarray:
        """This domain's block of a global array, as (points, components)"""
        return xg[self.loc:self.loc + self.size].reshape(self.n_points, self.n_vars)

    def affected_by(self, jg: Optional[int]) -> bool:
        """Whether perturbing global point ``jg`` changes any residual here"""
        if jg is None:
            return True
        return self.first_point <= jg + 1 and jg <= self.last_point + 1

    @abstractmethod
    def eval(self, jg, xg, rg, diagg, rdt: float = 0.0, **kwargs) -> None:
        """Evaluate residuals and algebraic/differential flags."""
        pass
