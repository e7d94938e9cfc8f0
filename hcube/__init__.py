"""hcube - derivative-free hypercube search for black-box global optimization."""

__version__ = "0.1.0"

from .config import OptimizerConfig, SearchParams
from .core import (
    Evaluation,
    HypercubeResult,
    Objective,
    Point,
    SearchRegion,
    Sense,
    TerminationReason,
)
from .errors import ConfigError, ConfigErrorKind, ConfigViolation
from .logging import configure_logging, get_logger, set_log_level
from .objectives import nan_function, rastrigin, sphere, summation
from .optimizer import HypercubeOptimizer, OptimizerState, maximize, minimize
from .region import best_of, clip, initial_region, sample, update

__all__ = [
    "ConfigError",
    "ConfigErrorKind",
    "ConfigViolation",
    "Evaluation",
    "HypercubeOptimizer",
    "HypercubeResult",
    "Objective",
    "OptimizerConfig",
    "OptimizerState",
    "Point",
    "SearchParams",
    "SearchRegion",
    "Sense",
    "TerminationReason",
    "__version__",
    "best_of",
    "clip",
    "configure_logging",
    "get_logger",
    "initial_region",
    "maximize",
    "minimize",
    "nan_function",
    "rastrigin",
    "sample",
    "set_log_level",
    "sphere",
    "summation",
    "update",
]
