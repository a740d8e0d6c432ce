import pytest

from zkaleido.errors import DataFormatError, InvalidProofReceiptError, ZkVmProofError
from zkaleido.proof import (
    AggregationInput,
    Proof,
    ProofReceipt,
    PublicValues,
    VerifyingKey,
    VerifyingKeyCommitment,
)


def test_wrapper_accessors():
    proof = Proof(b"ab")
    assert proof.as_bytes() == b"ab"
    assert bytes(proof) == b"ab"
    assert len(proof) == 2
    assert not proof.is_empty()
    assert Proof().is_empty()
    assert VerifyingKey(bytearray(b"k")).as_bytes() == b"k"
    assert PublicValues([1, 2]).as_bytes() == b"\x01\x02"


def test_wrappers_compare_by_type_and_content():
    assert Proof(b"a") == Proof(b"a")
    assert Proof(b"a") != PublicValues(b"a")
    assert Proof(b"a") != Proof(b"b")


def test_wrapper_rejects_int_and_str():
    with pytest.raises(TypeError):
        Proof(5)
    with pytest.raises(TypeError):
        PublicValues("text")


def test_default_receipt_bytes():
    assert ProofReceipt().to_bytes() == b"\x00" * 16


def test_receipt_round_trip():
    receipt = ProofReceipt(Proof(b"proof-bytes"), PublicValues(b"\x05\x00\x00\x00"))
    assert ProofReceipt.from_bytes(receipt.to_bytes()) == receipt


def test_receipt_save_load(tmp_path):
    receipt = ProofReceipt(Proof(b"\x00" * 10), PublicValues(b"values"))
    path = tmp_path / "fibonacci_native.proof"
    receipt.save(path)
    assert ProofReceipt.load(path) == receipt
    assert ProofReceipt.load(str(path)).public_values.as_bytes() == b"values"


def test_receipt_invalid_bytes():
    with pytest.raises(InvalidProofReceiptError) as info:
        ProofReceipt.from_bytes(b"\x05\x00")
    proof_err = info.value.source
    assert isinstance(proof_err, ZkVmProofError)
    assert isinstance(proof_err.source, DataFormatError)
    assert proof_err.source.kind == "bincode"


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ProofReceipt.load(tmp_path / "missing.proof")


def test_aggregation_input_fields():
    receipt = ProofReceipt(Proof(b"p"), PublicValues(b"v"))
    agg = AggregationInput(receipt, VerifyingKey(b"vk"))
    assert agg.receipt.public_values.as_bytes() == b"v"
    assert agg.vk.as_bytes() == b"vk"
    assert agg == AggregationInput(receipt, VerifyingKey(b"vk"))


def test_commitment_default_and_inner():
    assert VerifyingKeyCommitment().into_inner() == (0,) * 8
    words = [1, 2, 3, 4, 5, 6, 7, 2**32 - 1]
    assert VerifyingKeyCommitment(words).into_inner() == tuple(words)


def test_commitment_validation():
    with pytest.raises(ValueError):
        VerifyingKeyCommitment((1, 2, 3))
    with pytest.raises(ValueError):
        VerifyingKeyCommitment((0,) * 7 + (2**32,))
    with pytest.raises(ValueError):
        VerifyingKeyCommitment((0,) * 7 + (-1,))