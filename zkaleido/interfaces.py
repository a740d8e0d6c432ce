"""Abstract interfaces for guest environments, input builders, provers, verifiers and hosts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence as TypingSequence

from .codec import Schema, decode_borsh, encode_borsh
from .errors import (
    DataFormatError,
    InvalidProofReceiptError,
    OutputExtractionError,
    ZkVmProofError,
)
from .perf import PerformanceReport
from .proof import (
    AggregationInput,
    ProofReceipt,
    PublicValues,
    VerifyingKey,
    VerifyingKeyCommitment,
)
from .vm import ProofType


class ZkVmEnv(ABC):
    """The guest-side view of a zkVM: read inputs, commit outputs, verify proofs."""

    @abstractmethod
    def read_buf(self) -> bytes:
        """Read the next raw input buffer."""

    @abstractmethod
    def read_serde(self, schema: Schema) -> Any:
        """Read the next input, deserialized with the VM's serde format."""

    def read_borsh(self, schema: Schema) -> Any:
        """Read the next input buffer and decode it as borsh."""
        return decode_borsh(self.read_buf(), schema)

    @abstractmethod
    def commit_buf(self, raw_output: bytes) -> None:
        """Append pre-serialized bytes to the public values."""

    @abstractmethod
    def commit_serde(self, output: Any, schema: Schema) -> None:
        """Serialize ``output`` with the VM's serde format and commit it."""

    def commit_borsh(self, output: Any, schema: Schema) -> None:
        """Serialize ``output`` with borsh and commit it."""
        self.commit_buf(encode_borsh(output, schema))

    @abstractmethod
    def verify_native_proof(
        self, vk_digest: TypingSequence[int], public_values: bytes
    ) -> None:
        """Verify a proof of ``public_values`` against ``vk_digest``; raise on failure."""

    def read_verified_buf(self, vk_digest: TypingSequence[int]) -> bytes:
        """Read the next buffer and verify it as the public values of a proof."""
        public_values = self.read_buf()
        self.verify_native_proof(vk_digest, public_values)
        return public_values

    @abstractmethod
    def read_verified_serde(self, vk_digest: TypingSequence[int], schema: Schema) -> Any:
        """Read and verify committed serde output of another program."""

    def read_verified_borsh(self, vk_digest: TypingSequence[int], schema: Schema) -> Any:
        """Read and verify committed borsh output of another program."""
        return decode_borsh(self.read_verified_buf(vk_digest), schema)


class ZkVmInputBuilder(ABC):
    """Collects inputs for a prover; each writer returns the builder for chaining."""

    @abstractmethod
    def write_serde(self, item: Any, schema: Schema) -> "ZkVmInputBuilder":
        """Append ``item`` serialized with the VM's serde format."""

    @abstractmethod
    def write_borsh(self, item: Any, schema: Schema) -> "ZkVmInputBuilder":
        """Append ``item`` serialized with borsh."""

    @abstractmethod
    def write_buf(self, item: bytes) -> "ZkVmInputBuilder":
        """Append pre-serialized bytes."""

    @abstractmethod
    def write_proof(self, item: AggregationInput) -> "ZkVmInputBuilder":
        """Append a proof and its verifying key for composition."""

    @abstractmethod
    def build(self) -> Any:
        """Return the finished input."""


class ZkVmExecutor(ABC):
    """Executes zkVM programs."""

    @abstractmethod
    def input_builder(self) -> ZkVmInputBuilder:
        """Return a fresh input builder for this executor."""

    @abstractmethod
    def execute(self, input: Any) -> PublicValues:
        """Run the guest program on a built input and return its public values."""

    @abstractmethod
    def get_elf(self) -> bytes:
        """Return the loaded program."""


class ZkVmProver(ZkVmExecutor):
    """An executor that also produces proofs."""

    @abstractmethod
    def prove_inner(self, input: Any, proof_type: ProofType) -> Any:
        """Produce a backend-specific proof receipt."""

    @abstractmethod
    def to_receipt(self, native_receipt: Any) -> ProofReceipt:
        """Convert a backend receipt to a generic one; raise ZkVmProofError on failure."""

    def prove(self, input: Any, proof_type: ProofType) -> ProofReceipt:
        """Prove the program and return a generic receipt."""
        native_receipt = self.prove_inner(input, proof_type)
        try:
            return self.to_receipt(native_receipt)
        except ZkVmProofError as exc:
            raise InvalidProofReceiptError(exc) from exc


class ZkVmVerifier(ABC):
    """Verifies proofs and extracts their public output."""

    @abstractmethod
    def vk(self) -> VerifyingKey:
        """Return the verifying key of the loaded program."""

    @abstractmethod
    def vk_commitment(self) -> VerifyingKeyCommitment:
        """Return the commitment to the verifying key."""

    @abstractmethod
    def extract_serde_public_output(
        self, public_values: PublicValues, schema: Schema
    ) -> Any:
        """Decode public values written with the VM's serde format."""

    def extract_borsh_public_output(
        self, public_values: PublicValues, schema: Schema
    ) -> Any:
        """Decode public values written with borsh."""
        try:
            return decode_borsh(public_values.as_bytes(), schema)
        except DataFormatError as exc:
            raise OutputExtractionError(exc) from exc

    @abstractmethod
    def from_receipt(self, receipt: ProofReceipt) -> Any:
        """Convert a generic receipt to a backend one; raise ZkVmProofError on failure."""

    @abstractmethod
    def verify_inner(self, proof: Any) -> None:
        """Verify a backend receipt; raise on failure."""

    def verify(self, proof: ProofReceipt) -> None:
        """Verify a generic receipt."""
        try:
            native = self.from_receipt(proof)
        except ZkVmProofError as exc:
            raise InvalidProofReceiptError(exc) from exc
        self.verify_inner(native)


class ZkVmHost(ZkVmProver, ZkVmVerifier):
    """A host that both proves and verifies."""


class ZkVmHostPerf(ZkVmHost):
    """A host that can produce performance reports."""

    @abstractmethod
    def perf_report(self, input: Any) -> PerformanceReport:
        """Execute and prove ``input``, returning collected metrics."""


class ZkVmRemoteProver(ZkVmProver):
    """A prover that hands proving off to a remote service."""

    @abstractmethod
    async def start_proving(self, input: Any, proof_type: ProofType) -> str:
        """Start remote proving and return a request identifier."""

    @abstractmethod
    async def get_proof_if_ready_inner(self, proof_id: str) -> Optional[Any]:
        """Return the backend receipt if ready, else None."""

    async def get_proof_if_ready(self, proof_id: str) -> Optional[ProofReceipt]:
        """Return the generic receipt if ready, else None."""
        native = await self.get_proof_if_ready_inner(proof_id)
        if native is None:
            return None
        try:
            return self.to_receipt(native)
        except ZkVmProofError as exc:
            raise InvalidProofReceiptError(exc) from exc


class ZkVmRemoteHost(ZkVmHost, ZkVmRemoteProver):
    """A host with remote proving support."""