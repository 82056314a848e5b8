import dataclasses
import io

import numpy as np
import pytest

from minheap.benchmark import (
    CSV_HEADER,
    BenchmarkConfig,
    BenchmarkResult,
    run_benchmark,
    run_workload,
    write_csv,
)


def _counts(result):
    """Result fields that do not depend on wall-clock time"""
    row = dataclasses.asdict(result)
    row.pop("build_ns")
    row.pop("op_ns")
    return row


class TestBenchmarkConfig:
    def test_defaults(self):
        config = BenchmarkConfig()
        assert config.sizes == (100, 1000, 10000)
        assert config.seed == 42
        assert config.ops == 10000
        assert config.dec_ratio == 0.5

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"sizes": ()},
            {"sizes": (10, 0)},
            {"ops": -1},
            {"dec_ratio": -0.1},
            {"dec_ratio": 1.5},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            BenchmarkConfig(**kwargs)


class TestRunWorkload:
    def test_operation_counts(self):
        result = run_workload(50, 500, 0.5, np.random.default_rng(1), seed=1)
        assert result.seed == 1
        assert result.n == 50
        assert result.ops == 500
        assert result.extracts + result.decreases + result.inserts <= 500
        assert result.comparisons > 0
        assert result.mem_bytes > 0
        assert result.build_ns >= 0
        assert result.op_ns >= 0

    def test_deterministic_for_seed(self):
        first = run_workload(64, 300, 0.3, np.random.default_rng(9))
        second = run_workload(64, 300, 0.3, np.random.default_rng(9))
        assert _counts(first) == _counts(second)

    def test_no_decreases(self):
        result = run_workload(20, 200, 0.0, np.random.default_rng(3))
        assert result.decreases == 0
        assert result.extracts + result.inserts == 200

    def test_only_decreases(self):
        result = run_workload(20, 200, 1.0, np.random.default_rng(3))
        assert result.extracts == 0
        assert result.inserts == 0
        assert result.decreases <= 200

    def test_zero_ops_reports_build(self):
        result = run_workload(10, 0, 0.5, np.random.default_rng(0))
        assert result.extracts == result.decreases == result.inserts == 0
        assert result.swaps <= result.comparisons


class TestRunBenchmark:
    def test_one_result_per_size(self):
        config = BenchmarkConfig(sizes=(5, 50, 20), seed=7, ops=100)
        results = run_benchmark(config)
        assert [r.n for r in results] == [5, 50, 20]
        assert all(r.seed == 7 for r in results)

    def test_write_csv(self):
        results = run_benchmark(BenchmarkConfig(sizes=(8,), ops=10))
        stream = io.StringIO()
        write_csv(results, stream)
        lines = stream.getvalue().splitlines()

        assert lines[0] == (
            "seed,n,build_ns,ops,op_ns,comparisons,array_accesses,swaps,"
            "mem_bytes,extracts,decreases,inserts"
        )
        assert len(lines) == 2
        row = lines[1].split(",")
        assert len(row) == len(CSV_HEADER)
        assert row[:2] == ["42", "8"]

    def test_as_row_matches_header(self):
        result = BenchmarkResult(*range(len(CSV_HEADER)))
        assert result.as_row() == list(range(len(CSV_HEADER)))
