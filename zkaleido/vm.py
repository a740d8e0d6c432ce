"""Identifiers for zkVM backends and the kinds of proof they produce."""

from __future__ import annotations

from enum import Enum


class ZkVm(Enum):
    """The zkVM environment used to create a proof."""

    SP1 = "SP1"
    RISC0 = "Risc0"
    NATIVE = "Native"

    def __str__(self) -> str:
        return self.value


class ProofType(Enum):
    """Kinds of proof supported by the system."""

    GROTH16 = "Groth16"
    CORE = "Core"
    COMPRESSED = "Compressed"

    def __str__(self) -> str:
        return self.value