"""Performance metrics for proof generation."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, TypeVar

T = TypeVar("T")


def _div(numerator: float, denominator: float) -> float:
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


@dataclass
class ProofMetrics:
    """Timing and size figures for one proof kind; durations in seconds, speed in KHz."""

    prove_duration: float = 0.0
    proof_size: int = 0
    verify_duration: float = 0.0
    speed: float = 0.0


@dataclass
class PerformanceReport:
    """Performance figures for executing and proving a program."""

    name: str = ""
    shards: int = 0
    cycles: int = 0
    execution_duration: float = 0.0
    core_proof_metrics: Optional[ProofMetrics] = None
    compressed_proof_metrics: Optional[ProofMetrics] = None
    groth16_proof_metrics: Optional[ProofMetrics] = None
    e2e_prove_duration: float = 0.0
    e2e_prove_speed: float = 0.0
    success: bool = False

    @classmethod
    def from_metrics(
        cls,
        shards: int,
        cycles: int,
        execution_duration: float,
        core_proof_report: Optional[ProofMetrics],
        compressed_proof_report: Optional[ProofMetrics],
        groth16_proof_report: Optional[ProofMetrics],
    ) -> "PerformanceReport":
        """Build a successful report, deriving end-to-end duration and speed.

        The name is left empty for the program to fill in.
        """
        reports = (core_proof_report, compressed_proof_report, groth16_proof_report)
        e2e_prove_duration = execution_duration + sum(
            (report or ProofMetrics()).prove_duration for report in reports
        )
        e2e_prove_speed = _div(float(cycles), e2e_prove_duration) / 1_000.0
        return cls(
            name="",
            shards=shards,
            cycles=cycles,
            execution_duration=execution_duration,
            core_proof_metrics=core_proof_report,
            compressed_proof_metrics=compressed_proof_report,
            groth16_proof_metrics=groth16_proof_report,
            e2e_prove_duration=e2e_prove_duration,
            e2e_prove_speed=e2e_prove_speed,
            success=True,
        )


def time_operation(operation: Callable[[], T]) -> Tuple[T, float]:
    """Run ``operation`` once; return its result and the elapsed seconds."""
    start = time.perf_counter()
    result = operation()
    return result, time.perf_counter() - start