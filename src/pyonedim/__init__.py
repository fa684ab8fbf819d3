"""
PyOneDim: residual evaluation for one-dimensional reacting flows
"""
from importlib.metadata import version

__version__ = version("pyonedim")

from .core.base import (
    OneDimComponent,
    GridComponent,
    TransportComponent,
    ResidualComponent
)
from .core.config import FlowConfig, PorousConfig, SolidSolverConfig
from .core.errors import (
    OneDimError,
    InvalidGridError,
    UnsupportedConfigurationError,
    UnknownTransportModelError,
    DataLengthMismatchError
)
from .solvers.flow import StagnationFlow
from .solvers.strategies import FlowType
