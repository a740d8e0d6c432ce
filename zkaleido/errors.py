"""Exception hierarchy for zkVM execution, proving, verification and data handling."""

from __future__ import annotations

from typing import Optional, Union

from .vm import ProofType, ZkVm

_DATA_FORMAT_KINDS = ("bincode", "borsh", "serde", "other")


class DataFormatError(Exception):
    """A serialization or deserialization failure.

    ``kind`` names the format involved: ``bincode``, ``borsh``, ``serde`` or ``other``.
    """

    def __init__(self, message: str, kind: str = "other") -> None:
        if kind not in _DATA_FORMAT_KINDS:
            raise ValueError(f"unknown data format kind: {kind!r}")
        super().__init__(message)
        self.message = message
        self.kind = kind

    def __str__(self) -> str:
        if self.kind == "other":
            return f"error: {self.message}"
        return self.message


class ZkVmVerifyingKeyError(Exception):
    """A verification key could not be used: bad format, or bad size when no source is given."""

    def __init__(self, source: Optional[DataFormatError] = None) -> None:
        if source is None:
            message = "Verification Key size error"
        elif isinstance(source, DataFormatError):
            message = "Verification Key format error"
        else:
            raise TypeError(f"unsupported verifying key error source: {source!r}")
        super().__init__(message)
        self.source = source
        self.__cause__ = source


class ZkVmProofError(Exception):
    """A proof could not be used.

    Exactly one of: a data format ``source``, the ``expected_proof_type``, or the
    pair ``expected_zkvm`` and ``found_zkvm``.
    """

    def __init__(
        self,
        source: Optional[DataFormatError] = None,
        *,
        expected_proof_type: Optional[ProofType] = None,
        expected_zkvm: Optional[ZkVm] = None,
        found_zkvm: Optional[ZkVm] = None,
    ) -> None:
        zkvm_given = expected_zkvm is not None or found_zkvm is not None
        given = (source is not None) + (expected_proof_type is not None) + zkvm_given
        if given != 1:
            raise TypeError("exactly one kind of proof error detail must be given")
        if source is not None:
            if not isinstance(source, DataFormatError):
                raise TypeError(f"unsupported proof error source: {source!r}")
            message = "Input data format error"
        elif expected_proof_type is not None:
            message = f"Invalid ProofType: expected {expected_proof_type}"
        else:
            if expected_zkvm is None or found_zkvm is None:
                raise TypeError("both expected_zkvm and found_zkvm must be given")
            message = f"Invalid ZkVm: expected {expected_zkvm}, found {found_zkvm}"
        super().__init__(message)
        self.source = source
        self.expected_proof_type = expected_proof_type
        self.expected_zkvm = expected_zkvm
        self.found_zkvm = found_zkvm
        self.__cause__ = source


class ZkVmInputError(Exception):
    """Input preparation failed.

    ``source`` is a data format, proof or verifying key error, or a string
    describing a failure to build the input.
    """

    def __init__(
        self,
        source: Union[DataFormatError, ZkVmProofError, ZkVmVerifyingKeyError, str],
    ) -> None:
        if isinstance(source, DataFormatError):
            message = "Input data format error"
        elif isinstance(source, ZkVmProofError):
            message = "Input proof receipt error"
        elif isinstance(source, ZkVmVerifyingKeyError):
            message = "Input verification key error"
        elif isinstance(source, str):
            message = f"Input build error: {source}"
        else:
            raise TypeError(f"unsupported input error source: {source!r}")
        super().__init__(message)
        self.source = source
        if isinstance(source, Exception):
            self.__cause__ = source


class ZkVmError(Exception):
    """General zkVM error; used directly as the catch-all for uncategorised failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ExecutionError(ZkVmError):
    """Execution failed."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Execution failed: {reason}")
        self.reason = reason


class ProofGenerationError(ZkVmError):
    """Proof generation failed."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Proof generation failed: {reason}")
        self.reason = reason


class ProofVerificationError(ZkVmError):
    """Proof verification failed."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Proof verification failed: {reason}")
        self.reason = reason


class InvalidInputError(ZkVmError):
    """Input validation failed."""

    def __init__(self, source: ZkVmInputError) -> None:
        super().__init__(f"Input validation failed: {source}")
        self.source = source
        self.__cause__ = source


class InvalidElfError(ZkVmError):
    """ELF validation failed."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"ELF validation failed: {reason}")
        self.reason = reason


class InvalidVerifyingKeyError(ZkVmError):
    """The verification key is invalid."""

    def __init__(self, source: ZkVmVerifyingKeyError) -> None:
        super().__init__("Invalid Verification Key")
        self.source = source
        self.__cause__ = source


class InvalidProofReceiptError(ZkVmError):
    """The proof receipt is invalid."""

    def __init__(self, source: ZkVmProofError) -> None:
        super().__init__("Invalid proof receipt")
        self.source = source
        self.__cause__ = source


class OutputExtractionError(ZkVmError):
    """Public output could not be extracted."""

    def __init__(self, source: DataFormatError) -> None:
        super().__init__("Output extraction failed")
        self.source = source
        self.__cause__ = source