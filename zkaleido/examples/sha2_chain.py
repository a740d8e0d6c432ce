"""A program hashing a fixed message through a chain of SHA-256 rounds."""

from __future__ import annotations

import hashlib
from typing import Any

from ..codec import FixedArray, Primitive
from ..interfaces import ZkVmEnv, ZkVmHost, ZkVmInputBuilder
from ..program import ZkVmProgramPerf
from ..proof import PublicValues
from ..vm import ProofType

MESSAGE_TO_HASH = "Hello, world!"

_HASH_SCHEMA = FixedArray(Primitive.U8, 32)


def hash_n_rounds(message: str, rounds: int) -> bytes:
    """Hash ``message`` once, then rehash the digest until ``rounds`` hashes are done.

    At least one hash is always taken.
    """
    current = hashlib.sha256(message.encode("utf-8")).digest()
    for _ in range(1, rounds):
        current = hashlib.sha256(current).digest()
    return current


def process_sha2_chain(zkvm: ZkVmEnv) -> None:
    """Read the round count and commit the final 32-byte hash."""
    rounds = zkvm.read_serde(Primitive.U32)
    zkvm.commit_serde(hash_n_rounds(MESSAGE_TO_HASH, rounds), _HASH_SCHEMA)


class ShaChainProgram(ZkVmProgramPerf):
    """Proves a SHA-256 hash chain; input is a u32 round count, output 32 bytes."""

    def name(self) -> str:
        return "sha2_chain"

    def proof_type(self) -> ProofType:
        return ProofType.CORE

    def prepare_input(self, input: int, builder: ZkVmInputBuilder) -> Any:
        return builder.write_serde(input, Primitive.U32).build()

    def process_output(self, public_values: PublicValues, host: ZkVmHost) -> bytes:
        return host.extract_serde_public_output(public_values, _HASH_SCHEMA)