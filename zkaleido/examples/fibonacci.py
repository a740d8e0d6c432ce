"""A program computing Fibonacci numbers modulo 7919."""

from __future__ import annotations

from typing import Any

from ..codec import Primitive
from ..interfaces import ZkVmEnv, ZkVmHost, ZkVmInputBuilder
from ..program import ZkVmProgramPerf
from ..proof import PublicValues
from ..vm import ProofType

_MODULUS = 7919


def process_fibonacci(zkvm: ZkVmEnv) -> None:
    """Read n and commit the n-th Fibonacci number modulo 7919."""
    n = zkvm.read_serde(Primitive.U32)
    a, b = 0, 1
    for _ in range(n):
        a, b = b, (a + b) % _MODULUS
    zkvm.commit_serde(a, Primitive.U32)


class FibProgram(ZkVmProgramPerf):
    """Proves a Fibonacci computation; input and output are u32."""

    def name(self) -> str:
        return "fibonacci"

    def proof_type(self) -> ProofType:
        return ProofType.GROTH16

    def prepare_input(self, input: int, builder: ZkVmInputBuilder) -> Any:
        return builder.write_serde(input, Primitive.U32).build()

    def process_output(self, public_values: PublicValues, host: ZkVmHost) -> int:
        return host.extract_serde_public_output(public_values, Primitive.U32)