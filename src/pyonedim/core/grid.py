import numpy as np
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .base import GridComponent
from .errors import InvalidGridError


@dataclass
class RefineCriteria:
    """Refinement criteria handed to an external grid refiner"""
    ratio: float = 10.0  # Maximum ratio of adjacent interval widths
    slope: float = 0.8  # Maximum fractional change of a component across an interval
    curve: float = 0.8  # Maximum fractional change of the slope across an interval
    prune: float = -0.001  # Removal threshold, negative disables pruning
    grid_min: float = 1e-10  # Minimum interval width [m]


class FlowGrid(GridComponent):
    """
    Axial grid of a one-dimensional flow domain.

    Owns the point coordinates and interval widths. Whenever the number of
    points changes, registered resize callbacks are invoked so that every
    per-point array of the owning domain is reallocated.
    """
    def __init__(self, n_components: int = 0):
        super().__init__()
        # Grid points
        self.z = np.zeros(0)  # Grid point locations
        self.nPoints = 0
        self.jj = -1  # nPoints - 1

        # Grid metrics
        self.hh = np.zeros(0)  # Interval widths
        self.dlj = np.zeros(0)  # Half width of the cell around each point

        # Refinement hooks. The refinement policy lives with the outer solver.
        self.n_components = n_components
        self._active = np.zeros(n_components, dtype=bool)
        self.criteria = RefineCriteria()
        self.extra_var: Optional[np.ndarray] = None

        self._resize_callbacks: List[Callable[[int], None]] = []

    def initialize(self) -> None:
        self._initialized = True

    def add_resize_callback(self, callback: Callable[[int], None]) -> None:
        """Register a callable invoked with the new point count on every resize"""
        self._resize_callbacks.append(callback)

    def setupGrid(self, z: Sequence[float]) -> None:
        """Store new grid coordinates, which must be strictly increasing"""
        z = np.asarray(z, dtype=float).ravel()
        if len(z) < 2:
            raise InvalidGridError(f"A flow grid needs at least 2 points, got {len(z)}")
        if not np.all(np.isfinite(z)):
            raise InvalidGridError("Grid coordinates must be finite")
        bad = np.nonzero(np.diff(z) <= 0.0)[0]
        if len(bad):
            j = bad[0] + 1
            raise InvalidGridError(
                f"Grid points must be monotonically increasing: z[{j}] = {z[j]} <= z[{j-1}] = {z[j-1]}")

        self.z = z.copy()
        self.setSize(len(z))
        self.updateValues()
        self._initialized = True

    def setSize(self, new_nPoints: int) -> None:
        """Set grid size and reallocate dependent arrays"""
        self.nPoints = new_nPoints
        self.jj = new_nPoints - 1
        for callback in self._resize_callbacks:
            callback(new_nPoints)

    def updateValues(self) -> None:
        """Update grid metrics"""
        self.hh = np.diff(self.z)
        self.dlj = np.zeros(self.nPoints)
        self.dlj[1:-1] = 0.5 * (self.z[2:] - self.z[:-2])

    def update_grid_metrics(self) -> None:
        self.updateValues()

    @property
    def zmin(self) -> float:
        return float(self.z[0])

    @property
    def zmax(self) -> float:
        return float(self.z[-1])

    def normalized(self) -> np.ndarray:
        """Grid coordinates mapped onto [0, 1]"""
        return (self.z - self.z[0]) / (self.z[-1] - self.z[0])

    def setActive(self, n: int, active: bool = True) -> None:
        """Mark component ``n`` as a refinement variable"""
        self._active[n] = active

    def active(self, n: int) -> bool:
        return bool(self._active[n])

    def setCriteria(self, ratio: float = 10.0, slope: float = 0.8,
                    curve: float = 0.8, prune: float = -0.001) -> None:
        self.criteria.ratio = ratio
        self.criteria.slope = slope
        self.criteria.curve = curve
        self.criteria.prune = prune

    def setExtraVar(self, values: Optional[np.ndarray]) -> None:
        """Extra profile the refiner should resolve in addition to the components"""
        self.extra_var = None if values is None else np.asarray(values, dtype=float)
