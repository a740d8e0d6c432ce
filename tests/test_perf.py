import math

import pytest

from zkaleido.perf import PerformanceReport, ProofMetrics, time_operation


def test_defaults():
    report = PerformanceReport()
    assert report.success is False
    assert report.core_proof_metrics is None
    assert ProofMetrics().proof_size == 0


def test_from_metrics_without_proofs():
    report = PerformanceReport.from_metrics(3, 5000, 2.0, None, None, None)
    assert report.success is True
    assert report.name == ""
    assert report.shards == 3
    assert report.e2e_prove_duration == pytest.approx(2.0)
    assert report.e2e_prove_speed * report.e2e_prove_duration * 1000 == pytest.approx(5000)


def test_from_metrics_sums_prove_durations():
    core = ProofMetrics(prove_duration=1.5, proof_size=10)
    compressed = ProofMetrics(prove_duration=2.25)
    groth16 = ProofMetrics(prove_duration=0.25)
    report = PerformanceReport.from_metrics(1, 8000, 0.5, core, compressed, groth16)
    expected = 0.5 + core.prove_duration + compressed.prove_duration + groth16.prove_duration
    assert report.e2e_prove_duration == pytest.approx(expected)
    assert report.core_proof_metrics is core
    assert report.groth16_proof_metrics is groth16
    assert report.e2e_prove_speed * expected * 1000 == pytest.approx(8000)


def test_zero_duration_speed():
    report = PerformanceReport.from_metrics(0, 10, 0.0, None, None, None)
    assert report.e2e_prove_speed == math.inf
    assert report.e2e_prove_duration == 0.0
    empty = PerformanceReport.from_metrics(0, 0, 0.0, None, None, None)
    assert str(empty.e2e_prove_speed) == "nan"


def test_time_operation():
    result, elapsed = time_operation(lambda: "done")
    assert result == "done"
    assert elapsed >= 0.0


def test_time_operation_propagates_errors():
    def fail():
        raise RuntimeError("bad")

    with pytest.raises(RuntimeError, match="bad"):
        time_operation(fail)