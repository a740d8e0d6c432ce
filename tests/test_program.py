import pytest

from zkaleido.codec import Primitive, decode_bincode, encode_bincode, encode_borsh
from zkaleido.errors import (
    DataFormatError,
    InvalidInputError,
    OutputExtractionError,
    ZkVmInputError,
)
from zkaleido.interfaces import ZkVmHostPerf, ZkVmInputBuilder, ZkVmRemoteHost
from zkaleido.perf import PerformanceReport
from zkaleido.program import (
    ZkVmProgram,
    ZkVmProgramPerf,
    ZkVmRemoteProgram,
    env_flag,
)
from zkaleido.proof import (
    Proof,
    ProofReceipt,
    PublicValues,
    VerifyingKey,
    VerifyingKeyCommitment,
)
from zkaleido.vm import ProofType

U32 = Primitive.U32


class ListBuilder(ZkVmInputBuilder):
    def __init__(self):
        self.chunks = []

    def write_buf(self, item):
        self.chunks.append(bytes(item))
        return self

    def write_serde(self, item, schema):
        try:
            return self.write_buf(encode_bincode(item, schema))
        except DataFormatError as exc:
            raise ZkVmInputError(exc) from exc

    def write_borsh(self, item, schema):
        try:
            return self.write_buf(encode_borsh(item, schema))
        except DataFormatError as exc:
            raise ZkVmInputError(exc) from exc

    def write_proof(self, item):
        return self.write_buf(item.receipt.public_values.as_bytes())

    def build(self):
        return list(self.chunks)


class FakeHost(ZkVmHostPerf, ZkVmRemoteHost):
    def __init__(self, output=None):
        self.output = output
        self.proved = []
        self.started = []

    def __str__(self):
        return "fake"

    def input_builder(self):
        return ListBuilder()

    def execute(self, input):
        if self.output is not None:
            return PublicValues(self.output)
        return PublicValues(b"".join(input))

    def get_elf(self):
        return b""

    def prove_inner(self, input, proof_type):
        self.proved.append(proof_type)
        return self.execute(input)

    def to_receipt(self, native_receipt):
        return ProofReceipt(Proof(b""), native_receipt)

    def vk(self):
        return VerifyingKey(b"")

    def vk_commitment(self):
        return VerifyingKeyCommitment()

    def extract_serde_public_output(self, public_values, schema):
        try:
            return decode_bincode(public_values.as_bytes(), schema)
        except DataFormatError as exc:
            raise OutputExtractionError(exc) from exc

    def from_receipt(self, receipt):
        return receipt.public_values

    def verify_inner(self, proof):
        return None

    def perf_report(self, input):
        return PerformanceReport.from_metrics(2, 4000, 1.0, None, None, None)

    async def start_proving(self, input, proof_type):
        self.started.append((input, proof_type))
        return "req-0"

    async def get_proof_if_ready_inner(self, proof_id):
        return None


class EchoProgram(ZkVmProgramPerf, ZkVmRemoteProgram):
    def name(self):
        return "echo"

    def proof_type(self):
        return ProofType.COMPRESSED

    def prepare_input(self, input, builder):
        return builder.write_serde(input, U32).build()

    def process_output(self, public_values, host):
        return host.extract_serde_public_output(public_values, U32)


@pytest.mark.parametrize("value", ["1", "true", "TRUE", "True"])
def test_env_flag_enabled(monkeypatch, value):
    monkeypatch.setenv("ZK_TEST_FLAG", value)
    assert env_flag("ZK_TEST_FLAG") is True


@pytest.mark.parametrize("value", ["0", "false", "yes", ""])
def test_env_flag_disabled(monkeypatch, value):
    monkeypatch.setenv("ZK_TEST_FLAG", value)
    assert env_flag("ZK_TEST_FLAG") is False


def test_env_flag_unset(monkeypatch):
    monkeypatch.delenv("ZK_TEST_FLAG", raising=False)
    assert env_flag("ZK_TEST_FLAG") is False


def test_program_is_abstract():
    with pytest.raises(TypeError):
        ZkVmProgram()


def test_execute_round_trips_input():
    assert EchoProgram().execute(321, FakeHost()) == 321
    assert EchoProgram().execute(1, FakeHost(output=encode_bincode(321, U32))) == 321


def test_execute_wraps_input_errors():
    with pytest.raises(DataFormatError):
        encode_bincode("not a number", U32)
    with pytest.raises(InvalidInputError) as info:
        EchoProgram().execute("not a number", FakeHost())
    assert isinstance(info.value.source, ZkVmInputError)


def test_execute_propagates_output_errors():
    short_output = encode_bincode(1, Primitive.U8)
    with pytest.raises(OutputExtractionError):
        EchoProgram().execute(1, FakeHost(output=short_output))


def test_prove_uses_program_proof_type(monkeypatch):
    monkeypatch.delenv("ZKVM_PROOF_DUMP", raising=False)
    host = FakeHost()
    receipt = EchoProgram().prove(77, host)
    assert receipt.public_values.as_bytes() == encode_bincode(77, U32)
    assert host.proved == [ProofType.COMPRESSED]


def test_prove_checks_output(monkeypatch):
    monkeypatch.delenv("ZKVM_PROOF_DUMP", raising=False)
    short_output = encode_bincode(1, Primitive.U16)
    with pytest.raises(OutputExtractionError):
        EchoProgram().prove(1, FakeHost(output=short_output))


def test_prove_dumps_receipt_when_flag_set(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ZKVM_PROOF_DUMP", "1")
    receipt = EchoProgram().prove(9, FakeHost())
    dumped = tmp_path / "echo_fake.proof"
    assert ProofReceipt.load(dumped) == receipt


def test_prove_does_not_dump_without_flag(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ZKVM_PROOF_DUMP", raising=False)
    receipt = EchoProgram().prove(9, FakeHost())
    assert receipt == ProofReceipt(Proof(b""), PublicValues(encode_bincode(9, U32)))
    assert list(tmp_path.iterdir()) == []


def test_perf_report_takes_program_name():
    report = EchoProgram().perf_report(5, FakeHost())
    expected = PerformanceReport.from_metrics(2, 4000, 1.0, None, None, None)
    assert report.name == "echo"
    assert report.cycles == 4000
    assert report.success is True
    assert report.e2e_prove_speed == pytest.approx(expected.e2e_prove_speed)


def test_perf_report_wraps_input_errors():
    with pytest.raises(DataFormatError):
        encode_bincode(-1, U32)
    with pytest.raises(InvalidInputError):
        EchoProgram().perf_report(-1, FakeHost())


@pytest.mark.asyncio
async def test_start_proving_passes_prepared_input():
    host = FakeHost()
    proof_id = await EchoProgram().start_proving(12, host)
    assert proof_id == "req-0"
    assert host.started == [([encode_bincode(12, U32)], ProofType.COMPRESSED)]