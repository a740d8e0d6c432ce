"""Proofs, public values, verifying keys and the receipts that bundle them."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple, Union

from .codec import Primitive, Sequence, decode_bincode, encode_bincode
from .errors import DataFormatError, InvalidProofReceiptError, ZkVmProofError

_RECEIPT_SCHEMA = (Sequence(Primitive.U8), Sequence(Primitive.U8))


@dataclass(frozen=True)
class _ByteWrapper:
    data: bytes = b""

    def __post_init__(self) -> None:
        if isinstance(self.data, (int, str)):
            raise TypeError(f"expected bytes, got {type(self.data).__name__}")
        object.__setattr__(self, "data", bytes(self.data))

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)


class Proof(_ByteWrapper):
    """A validity proof as raw bytes."""

    def as_bytes(self) -> bytes:
        """Return the wrapped bytes."""
        return self.data

    def is_empty(self) -> bool:
        """Return True when there are no bytes."""
        return not self.data


class PublicValues(_ByteWrapper):
    """Public values committed by a program, as raw bytes."""

    def as_bytes(self) -> bytes:
        """Return the wrapped bytes."""
        return self.data

    def is_empty(self) -> bool:
        """Return True when there are no bytes."""
        return not self.data


class VerifyingKey(_ByteWrapper):
    """A serialized verification key."""

    def as_bytes(self) -> bytes:
        """Return the wrapped bytes."""
        return self.data

    def is_empty(self) -> bool:
        """Return True when there are no bytes."""
        return not self.data


@dataclass(frozen=True)
class ProofReceipt:
    """A proof together with its public values."""

    proof: Proof = field(default_factory=Proof)
    public_values: PublicValues = field(default_factory=PublicValues)

    def to_bytes(self) -> bytes:
        """Serialize the receipt with bincode."""
        return encode_bincode(
            (self.proof.as_bytes(), self.public_values.as_bytes()), _RECEIPT_SCHEMA
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "ProofReceipt":
        """Deserialize a bincode receipt."""
        try:
            proof, public_values = decode_bincode(data, _RECEIPT_SCHEMA)
        except DataFormatError as exc:
            raise InvalidProofReceiptError(ZkVmProofError(exc)) from exc
        return cls(Proof(proof), PublicValues(public_values))

    def save(self, path: Union[str, os.PathLike]) -> None:
        """Write the receipt to ``path``."""
        Path(path).write_bytes(self.to_bytes())

    @classmethod
    def load(cls, path: Union[str, os.PathLike]) -> "ProofReceipt":
        """Read a receipt from ``path``."""
        return cls.from_bytes(Path(path).read_bytes())


@dataclass(frozen=True)
class AggregationInput:
    """A receipt and the key that verifies it, as input to an aggregation program."""

    receipt: ProofReceipt
    vk: VerifyingKey


@dataclass(frozen=True)
class VerifyingKeyCommitment:
    """Commitment to a verifying key: eight 32-bit words."""

    words: Tuple[int, ...] = (0,) * 8

    def __post_init__(self) -> None:
        words = tuple(self.words)
        if len(words) != 8:
            raise ValueError(f"commitment needs 8 words, got {len(words)}")
        for word in words:
            if isinstance(word, bool) or not isinstance(word, int) or not 0 <= word < 2**32:
                raise ValueError(f"commitment word out of range: {word!r}")
        object.__setattr__(self, "words", words)

    def into_inner(self) -> Tuple[int, ...]:
        """Return the eight words."""
        return self.words