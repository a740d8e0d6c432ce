"""Host-agnostic programs whose proofs are produced by a zkVM host."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Any

from .errors import InvalidInputError, ZkVmInputError
from .interfaces import (
    ZkVmExecutor,
    ZkVmHost,
    ZkVmHostPerf,
    ZkVmInputBuilder,
    ZkVmRemoteHost,
)
from .perf import PerformanceReport
from .proof import ProofReceipt, PublicValues
from .vm import ProofType


def env_flag(name: str) -> bool:
    """Return True when environment variable ``name`` is "1" or "true" (any case)."""
    value = os.environ.get(name)
    if value is None:
        return False
    return value == "1" or value.lower() == "true"


class ZkVmProgram(ABC):
    """A program with typed input and output, provable on any host."""

    @abstractmethod
    def name(self) -> str:
        """Human-readable program name."""

    @abstractmethod
    def proof_type(self) -> ProofType:
        """The kind of proof this program generates."""

    @abstractmethod
    def prepare_input(self, input: Any, builder: ZkVmInputBuilder) -> Any:
        """Write ``input`` into ``builder`` and return the built input."""

    @abstractmethod
    def process_output(self, public_values: PublicValues, host: ZkVmHost) -> Any:
        """Turn the public values into the program's output."""

    def _prepare(self, input: Any, host: ZkVmExecutor) -> Any:
        try:
            return self.prepare_input(input, host.input_builder())
        except ZkVmInputError as exc:
            raise InvalidInputError(exc) from exc

    def execute(self, input: Any, host: ZkVmHost) -> Any:
        """Execute on ``host`` and return the processed output."""
        zkvm_input = self._prepare(input, host)
        public_values = host.execute(zkvm_input)
        return self.process_output(public_values, host)

    def prove(self, input: Any, host: ZkVmHost) -> ProofReceipt:
        """Prove on ``host``; dump the receipt to a file when ZKVM_PROOF_DUMP is set."""
        zkvm_input = self._prepare(input, host)
        receipt = host.prove(zkvm_input, self.proof_type())
        self.process_output(receipt.public_values, host)
        if env_flag("ZKVM_PROOF_DUMP"):
            receipt.save(f"{self.name()}_{host}.proof")
        return receipt


class ZkVmProgramPerf(ZkVmProgram):
    """A program that can report proving performance."""

    def perf_report(self, input: Any, host: ZkVmHostPerf) -> PerformanceReport:
        """Produce a performance report named after this program."""
        zkvm_input = self._prepare(input, host)
        report = host.perf_report(zkvm_input)
        report.name = self.name()
        return report


class ZkVmRemoteProgram(ZkVmProgram):
    """A program that can be proven by a remote prover."""

    async def start_proving(self, input: Any, host: ZkVmRemoteHost) -> str:
        """Start remote proving and return the request identifier."""
        zkvm_input = self._prepare(input, host)
        return await host.start_proving(zkvm_input, self.proof_type())