"""Parsed outfile records: one IterationRecord per solver iteration, collected in a RunReport."""
import json
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import pandas as pd

import aggregator

# Sentinels substituted for values that could not be parsed
INVALID_INT = -1
INVALID_FLOAT = -1.0


def _json_float(value: float):
    # NaN and infinities are written as strings; float() reads them back
    if math.isfinite(value):
        return value
    return "NaN" if math.isnan(value) else ("Infinity" if value > 0 else "-Infinity")


@dataclass(frozen=True)
class IterationRecord:
    number: int = 0
    preparing_time: pd.Timedelta = aggregator.ZERO
    solving_time: pd.Timedelta = aggregator.ZERO
    eigenvalues: Tuple[float, ...] = ()
    objective: float = 0.0
    volume_constraint: float = 0.0
    design_change: float = 0.0
    # Names of fields that hold a sentinel because their text failed to parse
    invalid_fields: Tuple[str, ...] = ()

    def is_valid(self, name: str) -> bool:
        return name not in self.invalid_fields

    def to_dict(self) -> Dict[str, Any]:
        """Structured form; durations are integer nanoseconds."""
        return {
            "number": self.number,
            "preparing_time": int(self.preparing_time.value),
            "solving_time": int(self.solving_time.value),
            "eigenvalues": [_json_float(v) for v in self.eigenvalues],
            "objective": _json_float(self.objective),
            "volume_constraint": _json_float(self.volume_constraint),
            "design_change": _json_float(self.design_change),
            "invalid_fields": list(self.invalid_fields),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IterationRecord":
        return cls(
            number=int(data.get("number", 0)),
            preparing_time=pd.Timedelta(int(data.get("preparing_time", 0)), unit="ns"),
            solving_time=pd.Timedelta(int(data.get("solving_time", 0)), unit="ns"),
            eigenvalues=tuple(float(v) for v in data.get("eigenvalues", ())),
            objective=float(data.get("objective", 0.0)),
            volume_constraint=float(data.get("volume_constraint", 0.0)),
            design_change=float(data.get("design_change", 0.0)),
            invalid_fields=tuple(data.get("invalid_fields", ())),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, allow_nan=False)

    @classmethod
    def from_json(cls, text: str) -> "IterationRecord":
        return cls.from_dict(json.loads(text))

    def __str__(self) -> str:
        return self.to_json()


@dataclass(frozen=True)
class RunReport:
    iterations: Tuple[IterationRecord, ...] = field(default_factory=tuple)
    source: Optional[str] = None

    def __len__(self) -> int:
        return len(self.iterations)

    def __iter__(self):
        return iter(self.iterations)

    def __getitem__(self, index):
        return self.iterations[index]

    def total_time_preparing(self) -> pd.Timedelta:
        return aggregator.total_time_preparing(self.iterations)

    def total_time_solving(self) -> pd.Timedelta:
        return aggregator.total_time_solving(self.iterations)

    def total_time(self) -> pd.Timedelta:
        return aggregator.total_time(self.iterations)

    def average_time(self) -> pd.Timedelta:
        """Raises EmptyReportError when there are no iterations."""
        return aggregator.average_time(self.iterations)

    def max_iteration_time(self) -> pd.Timedelta:
        return aggregator.max_iteration_time(self.iterations)

    def min_iteration_time(self) -> pd.Timedelta:
        return aggregator.min_iteration_time(self.iterations)

    def iteration_count(self) -> int:
        return aggregator.iteration_count(self.iterations)
