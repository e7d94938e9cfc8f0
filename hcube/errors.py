"""Configuration errors raised when an optimizer is constructed."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple


class ConfigErrorKind(Enum):
    """Category of a configuration violation."""

    INVALID_BOUNDS = "invalid_bounds"
    INVALID_TOLERANCE = "invalid_tolerance"
    INVALID_BUDGET = "invalid_budget"
    INITIAL_POINT_OUT_OF_BOUNDS = "initial_point_out_of_bounds"
    INVALID_DIMENSION = "invalid_dimension"


@dataclass(frozen=True)
class ConfigViolation:
    """A single field that failed validation."""

    kind: ConfigErrorKind
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ConfigError(ValueError):
    """Raised when an :class:`~hcube.config.OptimizerConfig` is invalid.

    All violations found are reported together; ``violations`` holds them in
    the order they were detected.
    """

    def __init__(self, violations: Iterable[ConfigViolation]) -> None:
        self.violations: Tuple[ConfigViolation, ...] = tuple(violations)
        if not self.violations:
            raise ValueError("ConfigError requires at least one violation")
        details = "; ".join(str(v) for v in self.violations)
        super().__init__(f"invalid optimizer configuration: {details}")

    @property
    def kinds(self) -> frozenset[ConfigErrorKind]:
        return frozenset(v.kind for v in self.violations)

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(v.field for v in self.violations)


__all__ = ["ConfigError", "ConfigErrorKind", "ConfigViolation"]
