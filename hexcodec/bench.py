# hexcodec/bench.py
import os
import random
import time
import logging
from dataclasses import dataclass
from typing import Optional

import psutil
from prometheus_client import CollectorRegistry, Gauge, Histogram

from hexcodec.config import BenchmarkConfig
from hexcodec.hex import HexCodecError, bytes_to_hex_string, hex_string_to_bytes

logger = logging.getLogger(__name__)

MB = 1024 * 1024


@dataclass
class BenchmarkResult:
    payload_size: int
    iterations: int
    encode_seconds: float
    decode_seconds: float
    memory_growth_mb: float

    @property
    def encode_mb_per_s(self) -> float:
        return _throughput(self.payload_size * self.iterations, self.encode_seconds)

    @property
    def decode_mb_per_s(self) -> float:
        return _throughput(self.payload_size * self.iterations, self.decode_seconds)

    def within_budget(self, config: BenchmarkConfig) -> bool:
        return self.memory_growth_mb <= config.max_memory_growth_mb

    def summary(self) -> str:
        return (
            f"payload: {self.payload_size} bytes x {self.iterations}\n"
            f"encode: {self.encode_seconds:.3f}s ({self.encode_mb_per_s:.1f} MB/s)\n"
            f"decode: {self.decode_seconds:.3f}s ({self.decode_mb_per_s:.1f} MB/s)\n"
            f"memory growth: {self.memory_growth_mb:.2f} MB"
        )


def _throughput(total_bytes: int, seconds: float) -> float:
    if seconds <= 0:
        return 0.0
    return total_bytes / MB / seconds


class BenchmarkMetrics:
    """Prometheus metrics for a benchmark run, kept on their own registry."""

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry or CollectorRegistry()
        self.encode_latency = Histogram('hexcodec_encode_latency_seconds', 'Latency of one bytes_to_hex_string call', registry=self.registry)
        self.decode_latency = Histogram('hexcodec_decode_latency_seconds', 'Latency of one hex_string_to_bytes call', registry=self.registry)
        self.memory_growth = Gauge('hexcodec_memory_growth_mb', 'Peak RSS growth during the run', registry=self.registry)


def make_payload(size: int, seed: int) -> bytes:
    """Deterministic pseudo-random payload."""
    rng = random.Random(seed)
    return rng.randbytes(size)


def run_benchmark(config: BenchmarkConfig, metrics: Optional[BenchmarkMetrics] = None) -> BenchmarkResult:
    """
    Time encode/decode round trips over a generated payload.

    Raises HexCodecError if a round trip does not reproduce the payload.
    """
    if metrics is None:
        metrics = BenchmarkMetrics()

    process = psutil.Process(os.getpid())
    payload = make_payload(config.payload_size, config.seed)
    initial_memory = process.memory_info().rss / MB
    peak_memory = initial_memory

    logger.info(f"Benchmarking {config.iterations} rounds of {config.payload_size} bytes")

    encode_seconds = 0.0
    decode_seconds = 0.0
    for i in range(config.iterations):
        start = time.perf_counter()
        text = bytes_to_hex_string(payload)
        elapsed = time.perf_counter() - start
        encode_seconds += elapsed
        metrics.encode_latency.observe(elapsed)

        start = time.perf_counter()
        decoded = hex_string_to_bytes(text)
        elapsed = time.perf_counter() - start
        decode_seconds += elapsed
        metrics.decode_latency.observe(elapsed)

        if decoded != payload:
            raise HexCodecError(f"Round trip mismatch in round {i + 1}")

        peak_memory = max(peak_memory, process.memory_info().rss / MB)
        logger.debug(f"Round {i + 1}: encode+decode done, rss {peak_memory:.2f} MB")

    growth = peak_memory - initial_memory
    metrics.memory_growth.set(growth)

    result = BenchmarkResult(
        payload_size=config.payload_size,
        iterations=config.iterations,
        encode_seconds=encode_seconds,
        decode_seconds=decode_seconds,
        memory_growth_mb=growth,
    )
    if not result.within_budget(config):
        logger.warning(f"Memory growth {growth:.2f} MB exceeds budget of {config.max_memory_growth_mb} MB")
    return result
