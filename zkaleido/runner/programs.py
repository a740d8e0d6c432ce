"""Guest programs known to the runner and the reports produced for each."""

from __future__ import annotations

import os
from enum import Enum
from typing import Callable, Iterable, List

from ..examples.fibonacci import FibProgram
from ..examples.fibonacci_composition import FibCompositionInput, FibCompositionProgram
from ..examples.schnorr import SchnorrSigInput, SchnorrSigProgram
from ..examples.sha2_chain import ShaChainProgram
from ..interfaces import ZkVmHost, ZkVmHostPerf
from ..perf import PerformanceReport
from ..proof import AggregationInput


class GuestProgram(Enum):
    """Programs the runner can report on."""

    FIBONACCI = "fibonacci"
    FIBONACCI_COMPOSITION = "fibonacci-composition"
    SHA2_CHAIN = "sha2-chain"
    SCHNORR_SIG_VERIFY = "schnorr-sig-verify"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_str(cls, text: str) -> "GuestProgram":
        """Parse a program name, ignoring case."""
        try:
            return cls(text.lower())
        except ValueError:
            raise ValueError(f"unknown program: {text}") from None


def fib_report(host: ZkVmHostPerf) -> PerformanceReport:
    """Prove Fibonacci of 5, then report on it with mocking enabled."""
    program = FibProgram()
    program.prove(5, host)
    os.environ["ZKVM_MOCK"] = "1"
    return program.perf_report(5, host)


def fib_composition_report(
    fib_host: ZkVmHost, fib_composition_host: ZkVmHostPerf
) -> PerformanceReport:
    """Prove Fibonacci of 5 and report on the program that verifies that proof."""
    receipt = FibProgram().prove(5, fib_host)
    composition_input = FibCompositionInput(
        fib_proof_with_vk=AggregationInput(receipt, fib_host.vk()),
        fib_vk_commitment=fib_host.vk_commitment(),
    )
    return FibCompositionProgram().perf_report(composition_input, fib_composition_host)


def sha2_report(host: ZkVmHostPerf) -> PerformanceReport:
    """Report on a SHA-256 chain of 5 rounds."""
    return ShaChainProgram().perf_report(5, host)


def schnorr_report(host: ZkVmHostPerf) -> PerformanceReport:
    """Report on verifying a freshly made random signature."""
    return SchnorrSigProgram().perf_report(SchnorrSigInput.new_random(), host)


def run_programs(
    programs: Iterable[GuestProgram],
    host_for: Callable[[GuestProgram], ZkVmHostPerf],
) -> List[PerformanceReport]:
    """Produce a report for each program, in order.

    ``host_for`` returns the host loaded with a given program.
    """
    reports = []
    for program in programs:
        if program is GuestProgram.FIBONACCI:
            report = fib_report(host_for(GuestProgram.FIBONACCI))
        elif program is GuestProgram.FIBONACCI_COMPOSITION:
            report = fib_composition_report(
                host_for(GuestProgram.FIBONACCI),
                host_for(GuestProgram.FIBONACCI_COMPOSITION),
            )
        elif program is GuestProgram.SHA2_CHAIN:
            report = sha2_report(host_for(GuestProgram.SHA2_CHAIN))
        elif program is GuestProgram.SCHNORR_SIG_VERIFY:
            report = schnorr_report(host_for(GuestProgram.SCHNORR_SIG_VERIFY))
        else:
            raise ValueError(f"unknown program: {program}")
        reports.append(report)
    return reports