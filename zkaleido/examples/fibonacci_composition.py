"""A program that verifies a Fibonacci proof and re-commits its result."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..codec import FixedArray, Primitive
from ..interfaces import ZkVmEnv, ZkVmHost, ZkVmInputBuilder
from ..program import ZkVmProgramPerf
from ..proof import AggregationInput, PublicValues, VerifyingKeyCommitment
from ..vm import ProofType

_VK_DIGEST_SCHEMA = FixedArray(Primitive.U32, 8)


def process_fibonacci_composition(zkvm: ZkVmEnv) -> None:
    """Read the Fibonacci key digest, verify its proven output and commit it."""
    fib_vk = zkvm.read_serde(_VK_DIGEST_SCHEMA)
    valid_fib_no = zkvm.read_verified_serde(fib_vk, Primitive.U32)
    zkvm.commit_serde(valid_fib_no, Primitive.U32)


@dataclass(frozen=True)
class FibCompositionInput:
    """A Fibonacci proof with its verifying key, and the key's commitment."""

    fib_proof_with_vk: AggregationInput
    fib_vk_commitment: VerifyingKeyCommitment


class FibCompositionProgram(ZkVmProgramPerf):
    """Proves that a Fibonacci proof verifies; output is the proven u32."""

    def name(self) -> str:
        return "fibonacci composition"

    def proof_type(self) -> ProofType:
        return ProofType.COMPRESSED

    def prepare_input(self, input: FibCompositionInput, builder: ZkVmInputBuilder) -> Any:
        return (
            builder.write_serde(list(input.fib_vk_commitment.into_inner()), _VK_DIGEST_SCHEMA)
            .write_proof(input.fib_proof_with_vk)
            .build()
        )

    def process_output(self, public_values: PublicValues, host: ZkVmHost) -> int:
        return host.extract_serde_public_output(public_values, Primitive.U32)