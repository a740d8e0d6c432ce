import pytest

from zkaleido.examples.fibonacci import FibProgram, process_fibonacci
from zkaleido.examples.fibonacci_composition import (
    FibCompositionInput,
    FibCompositionProgram,
    process_fibonacci_composition,
)
from zkaleido.native import NativeHost
from zkaleido.proof import AggregationInput
from zkaleido.vm import ProofType


@pytest.fixture(autouse=True)
def _no_dump(monkeypatch):
    monkeypatch.delenv("ZKVM_PROOF_DUMP", raising=False)


def _composition_input(n):
    fib_host = NativeHost(process_fibonacci)
    receipt = FibProgram().prove(n, fib_host)
    return FibCompositionInput(
        fib_proof_with_vk=AggregationInput(receipt, fib_host.vk()),
        fib_vk_commitment=fib_host.vk_commitment(),
    ), receipt


def test_composition_reproduces_fibonacci_output():
    comp_input, receipt = _composition_input(5)
    host = NativeHost(process_fibonacci_composition)
    program = FibCompositionProgram()
    comp_receipt = program.prove(comp_input, host)
    assert program.process_output(comp_receipt.public_values, host) == 5
    assert comp_receipt.public_values == receipt.public_values


def test_execute_matches_inner_program():
    comp_input, _ = _composition_input(10)
    host = NativeHost(process_fibonacci_composition)
    fib_result = FibProgram().execute(10, NativeHost(process_fibonacci))
    assert FibCompositionProgram().execute(comp_input, host) == fib_result


def test_prepared_input_layout():
    comp_input, receipt = _composition_input(5)
    host = NativeHost(process_fibonacci_composition)
    machine = FibCompositionProgram().prepare_input(comp_input, host.input_builder())
    assert machine.inputs[0] == bytes(32)
    assert machine.inputs[1] == receipt.public_values.as_bytes()
    assert len(machine.inputs) == 2


def test_program_metadata():
    program = FibCompositionProgram()
    assert program.name() == "fibonacci composition"
    assert program.proof_type() is ProofType.COMPRESSED