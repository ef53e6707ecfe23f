"""
Benchmark and memory usage tests for the hex codec.
"""
import logging
import pytest
from prometheus_client import CollectorRegistry
from hexcodec.bench import BenchmarkMetrics, BenchmarkResult, make_payload, run_benchmark
from hexcodec.config import BenchmarkConfig
from hexcodec.hex import HexCodecError


@pytest.fixture
def small_config():
    return BenchmarkConfig(payload_size=4096, iterations=3, seed=7)


def test_payload_is_deterministic():
    assert make_payload(64, 1) == make_payload(64, 1)
    assert make_payload(64, 1) != make_payload(64, 2)
    assert len(make_payload(100, 0)) == 100


def test_run_benchmark(small_config):
    registry = CollectorRegistry()
    metrics = BenchmarkMetrics(registry)

    result = run_benchmark(small_config, metrics)

    assert result.payload_size == 4096
    assert result.iterations == 3
    assert result.encode_seconds > 0
    assert result.decode_seconds > 0
    assert result.memory_growth_mb >= 0
    assert registry.get_sample_value('hexcodec_encode_latency_seconds_count') == 3
    assert registry.get_sample_value('hexcodec_decode_latency_seconds_count') == 3
    print(result.summary())


def test_round_trip_mismatch(small_config, monkeypatch, caplog):
    monkeypatch.setattr('hexcodec.bench.hex_string_to_bytes', lambda text: b'')

    with caplog.at_level(logging.DEBUG, logger='hexcodec.bench'):
        with pytest.raises(HexCodecError, match="round 1"):
            run_benchmark(small_config)

    # reporting the failure is left to the caller
    assert not [r for r in caplog.records if r.levelno >= logging.ERROR]


def test_throughput_and_budget():
    result = BenchmarkResult(
        payload_size=1024 * 1024,
        iterations=4,
        encode_seconds=2.0,
        decode_seconds=0.0,
        memory_growth_mb=10.0,
    )

    assert result.encode_mb_per_s == pytest.approx(2.0)
    assert result.decode_mb_per_s == 0.0
    assert result.within_budget(BenchmarkConfig(max_memory_growth_mb=10))
    assert not result.within_budget(BenchmarkConfig(max_memory_growth_mb=5))


def test_encode_memory_stays_bounded():
    """A 1MB payload should not grow RSS past the default budget."""
    config = BenchmarkConfig(payload_size=1024 * 1024, iterations=2)
    result = run_benchmark(config)

    assert result.within_budget(config)
