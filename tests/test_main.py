import json

import httpx
import pytest
import respx

from zkaleido.examples.fibonacci import process_fibonacci
from zkaleido.interfaces import ZkVmHostPerf
from zkaleido.native import NativeHost
from zkaleido.perf import PerformanceReport
from zkaleido.runner.args import EvalArgs
from zkaleido.runner.main import main, run
from zkaleido.runner.programs import GuestProgram


class PerfNativeHost(NativeHost, ZkVmHostPerf):
    succeed = True

    def perf_report(self, input):
        public_values = self.execute(input)
        report = PerformanceReport.from_metrics(
            1, len(public_values), 0.5, None, None, None
        )
        report.success = self.succeed
        return report


class FailingHost(PerfNativeHost):
    succeed = False


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    monkeypatch.setenv("ZKVM_MOCK", "0")
    monkeypatch.delenv("ZKVM_PROOF_DUMP", raising=False)


def test_run_prints_results(capsys):
    args = EvalArgs(programs=[GuestProgram.FIBONACCI])
    status = run(args, [("SP1", lambda program: PerfNativeHost(process_fibonacci))])
    out = capsys.readouterr().out
    assert status == 0
    assert out.startswith("*Local execution*\n")
    assert "*SP1 Execution Results*" in out
    assert "| fibonacci" in out


def test_run_stops_on_failure(capsys):
    args = EvalArgs(programs=[GuestProgram.FIBONACCI])
    backends = [
        ("SP1", lambda program: FailingHost(process_fibonacci)),
        ("RISC0", lambda program: PerfNativeHost(process_fibonacci)),
    ]
    status = run(args, backends)
    out = capsys.readouterr().out
    assert status == 1
    assert "Some SP1 programs failed. Please check the results below." in out
    assert "RISC0" not in out


def test_run_posts_to_github(monkeypatch, capsys):
    monkeypatch.setenv("GITHUB_REPOSITORY", "example/repo")
    url = "https://api.github.com/repos/example/repo/issues/3/comments"
    args = EvalArgs(
        post_to_gh=True,
        github_token="token",
        pr_number="3",
        commit_hash="abcdef0123456789",
        programs=[GuestProgram.FIBONACCI],
    )
    with respx.mock:
        respx.get(url).mock(return_value=httpx.Response(200, json=[]))
        post = respx.post(url).mock(return_value=httpx.Response(201, json={}))
        status = run(args, [("SP1", lambda program: PerfNativeHost(process_fibonacci))])
    assert status == 0
    body = json.loads(post.calls.last.request.content)["body"]
    assert body.startswith("**Commit**: abcdef01\n")
    assert "**SP1 Execution Results**" in body


def test_main_without_backends(capsys):
    status = main(["--programs", "fibonacci"])
    out = capsys.readouterr().out
    assert status == 0
    assert out.startswith("*Local execution*")
    assert "Execution Results" not in out