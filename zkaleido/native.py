"""A native zkVM backend that runs guest logic directly and produces empty proofs.

The public values are the same as a real backend would produce. No ELF is built
and no cryptographic proof is made, which makes this backend useful for local
testing and development.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Sequence as TypingSequence

from .codec import Schema, decode_bincode, encode_bincode, encode_borsh
from .errors import (
    DataFormatError,
    OutputExtractionError,
    ProofVerificationError,
    ZkVmInputError,
    ZkVmProofError,
)
from .interfaces import ZkVmEnv, ZkVmHost, ZkVmInputBuilder
from .proof import (
    AggregationInput,
    Proof,
    ProofReceipt,
    PublicValues,
    VerifyingKey,
    VerifyingKeyCommitment,
)
from .vm import ProofType

_VK_DIGEST_WORDS = 8
_U32_LIMIT = 1 << 32


@dataclass
class NativeMachineState:
    """Mutable state of a native machine: the next input index and the committed output."""

    input_ptr: int = 0
    output: bytearray = field(default_factory=bytearray)


@dataclass
class NativeMachine(ZkVmEnv):
    """A guest environment that reads from a list of input buffers and collects output."""

    inputs: list = field(default_factory=list)
    state: NativeMachineState = field(default_factory=NativeMachineState)

    def write_slice(self, data: bytes) -> None:
        """Append a pre-serialized input buffer."""
        self.inputs.append(bytes(data))

    def _clone(self) -> "NativeMachine":
        return NativeMachine(
            inputs=list(self.inputs),
            state=NativeMachineState(
                input_ptr=self.state.input_ptr, output=bytearray(self.state.output)
            ),
        )

    def read_buf(self) -> bytes:
        ptr = self.state.input_ptr
        if ptr >= len(self.inputs):
            raise IndexError(f"no input left to read at position {ptr}")
        self.state.input_ptr = ptr + 1
        return self.inputs[ptr]

    def read_serde(self, schema: Schema) -> Any:
        return decode_bincode(self.read_buf(), schema)

    def commit_buf(self, raw_output: bytes) -> None:
        self.state.output += bytes(raw_output)

    def commit_serde(self, output: Any, schema: Schema) -> None:
        self.commit_buf(encode_bincode(output, schema))

    def verify_native_proof(
        self, vk_digest: TypingSequence[int], public_values: bytes
    ) -> None:
        """Accept any proof, as native proofs are empty; only the digest's shape is checked."""
        words = list(vk_digest)
        if len(words) != _VK_DIGEST_WORDS:
            raise ValueError(
                f"verification key digest must have {_VK_DIGEST_WORDS} words, got {len(words)}"
            )
        if any(not 0 <= word < _U32_LIMIT for word in words):
            raise ValueError("verification key digest words must be 32-bit unsigned integers")
        bytes(public_values)

    def read_verified_serde(self, vk_digest: TypingSequence[int], schema: Schema) -> Any:
        return self.read_serde(schema)


class NativeMachineInputBuilder(ZkVmInputBuilder):
    """Builds a :class:`NativeMachine` loaded with inputs."""

    def __init__(self) -> None:
        self.machine = NativeMachine()

    def write_buf(self, item: bytes) -> "NativeMachineInputBuilder":
        self.machine.write_slice(bytes(item))
        return self

    def write_serde(self, item: Any, schema: Schema) -> "NativeMachineInputBuilder":
        try:
            data = encode_bincode(item, schema)
        except DataFormatError as exc:
            raise ZkVmInputError(exc) from exc
        return self.write_buf(data)

    def write_borsh(self, item: Any, schema: Schema) -> "NativeMachineInputBuilder":
        try:
            data = encode_borsh(item, schema)
        except DataFormatError as exc:
            raise ZkVmInputError(exc) from exc
        return self.write_buf(data)

    def write_proof(self, item: AggregationInput) -> "NativeMachineInputBuilder":
        # Native proofs are empty, so only the public values are passed on.
        return self.write_buf(item.receipt.public_values.as_bytes())

    def build(self) -> NativeMachine:
        return self.machine._clone()


@dataclass(frozen=True)
class NativeProofReceipt:
    """The native backend's receipt: a generic receipt with an empty proof."""

    receipt: ProofReceipt


class NativeHost(ZkVmHost):
    """A host that runs ``process_proof`` on a :class:`NativeMachine`."""

    def __init__(self, process_proof: Callable[[NativeMachine], None]) -> None:
        self.process_proof = process_proof

    def __str__(self) -> str:
        return "native"

    def __repr__(self) -> str:
        return "native"

    def input_builder(self) -> NativeMachineInputBuilder:
        return NativeMachineInputBuilder()

    def execute(self, input: NativeMachine) -> PublicValues:
        self.process_proof(input)
        return PublicValues(bytes(input.state.output))

    def get_elf(self) -> bytes:
        return b""

    def prove_inner(self, input: NativeMachine, proof_type: ProofType) -> NativeProofReceipt:
        public_values = self.execute(input)
        return self.from_receipt(ProofReceipt(Proof(), public_values))

    def to_receipt(self, native_receipt: Any) -> ProofReceipt:
        if not isinstance(native_receipt, NativeProofReceipt):
            raise ZkVmProofError(
                DataFormatError(
                    f"expected a native proof receipt, got {type(native_receipt).__name__}"
                )
            )
        return native_receipt.receipt

    def vk(self) -> VerifyingKey:
        return VerifyingKey()

    def vk_commitment(self) -> VerifyingKeyCommitment:
        return VerifyingKeyCommitment((0,) * 8)

    def extract_serde_public_output(
        self, public_values: PublicValues, schema: Schema
    ) -> Any:
        try:
            return decode_bincode(public_values.as_bytes(), schema)
        except DataFormatError as exc:
            raise OutputExtractionError(exc) from exc

    def from_receipt(self, receipt: ProofReceipt) -> NativeProofReceipt:
        return NativeProofReceipt(receipt)

    def verify_inner(self, proof: NativeProofReceipt) -> None:
        """Accept any native receipt; anything else is rejected."""
        if not isinstance(proof, NativeProofReceipt):
            raise ProofVerificationError(
                f"expected a native proof receipt, got {type(proof).__name__}"
            )