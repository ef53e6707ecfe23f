"""
hexcodec command-line tool.

Usage:
    python -m hexcodec [-c CONFIG] [-d] <command> [options]

Commands:
    encode      Read raw bytes (file or stdin) and print lowercase hex
    decode      Read hex text and write the decoded bytes
    u64-encode  Print a 64-bit unsigned value as hex digits
    u64-decode  Print the decimal value of hex text
    bench       Run the encode/decode benchmark
"""
import argparse
import json
import logging
import sys
from typing import Optional

from prometheus_client import generate_latest

from hexcodec.bench import BenchmarkMetrics, run_benchmark
from hexcodec.config import Config
from hexcodec.hex import (
    HexCodecError,
    bytes_to_hex_string,
    hex_string_to_bytes,
    hex_string_to_u64,
    u64_to_hex_string,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='hexcodec',
        description='Lenient hexadecimal encoder/decoder',
    )
    parser.add_argument('-c', '--config', default=None, help='JSON configuration file')
    parser.add_argument('-d', '--debug', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest="command", required=True)

    parser_encode = subparsers.add_parser("encode", help="Encode raw bytes as hex")
    parser_encode.add_argument("-i", "--input", default=None, help="Input file (default: stdin)")
    parser_encode.add_argument("-w", "--width", type=int, default=None, help="Wrap output every N characters")

    parser_decode = subparsers.add_parser("decode", help="Decode hex text to raw bytes")
    parser_decode.add_argument("-i", "--input", default=None, help="Input file (default: stdin)")
    parser_decode.add_argument("-o", "--output", default=None, help="Output file (default: stdout)")

    parser_u64_encode = subparsers.add_parser("u64-encode", help="Encode a 64-bit unsigned value")
    parser_u64_encode.add_argument("value", help="Value, decimal or 0x/0o/0b prefixed")
    zeroes = parser_u64_encode.add_mutually_exclusive_group()
    zeroes.add_argument("--skip-leading-zeroes", dest="skip", action="store_const", const=True, default=None)
    zeroes.add_argument("--keep-leading-zeroes", dest="skip", action="store_const", const=False)

    parser_u64_decode = subparsers.add_parser("u64-decode", help="Decode hex text to a 64-bit value")
    parser_u64_decode.add_argument("text", help="Hex text, 0x prefix allowed")

    parser_bench = subparsers.add_parser("bench", help="Benchmark encode/decode throughput")
    parser_bench.add_argument("--size", type=int, default=None, help="Payload size in bytes")
    parser_bench.add_argument("--iterations", type=int, default=None, help="Number of rounds")
    parser_bench.add_argument("--prometheus", action="store_true", help="Print metrics in Prometheus text format")

    return parser


def setup_logging(config: Config, debug: bool = False):
    level = logging.DEBUG if debug else getattr(logging, config.logging.level.upper())
    logging.basicConfig(level=level, format=config.logging.format)
    logging.getLogger('hexcodec').setLevel(level)


def load_config(path: Optional[str]) -> Config:
    config = Config.from_file(path) if path else Config.default()
    config.validate()
    return config


def _read_input(path: Optional[str]) -> bytes:
    if path:
        with open(path, 'rb') as f:
            return f.read()
    return sys.stdin.buffer.read()


def wrap(text: str, width: int) -> str:
    """Split text into lines of at most `width` characters; 0 means no wrapping."""
    if width <= 0 or not text:
        return text
    return "\n".join(text[i:i + width] for i in range(0, len(text), width))


def cmd_encode(args, config: Config) -> int:
    data = _read_input(args.input)
    width = args.width if args.width is not None else config.format.line_width
    if width < 0:
        logger.error(f"Line width must be >= 0, got {width}")
        return 1
    logger.debug(f"Encoding {len(data)} bytes")
    print(wrap(bytes_to_hex_string(data), width))
    return 0


def cmd_decode(args, config: Config) -> int:
    data = hex_string_to_bytes(_read_input(args.input))
    logger.debug(f"Decoded {len(data)} bytes")
    if args.output:
        with open(args.output, 'wb') as f:
            f.write(data)
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
    return 0


def cmd_u64_encode(args, config: Config) -> int:
    skip = args.skip if args.skip is not None else config.format.skip_leading_zeroes
    try:
        value = int(args.value, 0)
        print(u64_to_hex_string(value, skip))
    except ValueError as e:
        logger.error(f"Invalid value {args.value!r}: {e}")
        return 1
    return 0


def cmd_u64_decode(args, config: Config) -> int:
    print(hex_string_to_u64(args.text))
    return 0


def cmd_bench(args, config: Config) -> int:
    bench_config = config.benchmark
    if args.size is not None:
        bench_config.payload_size = args.size
    if args.iterations is not None:
        bench_config.iterations = args.iterations
    if bench_config.payload_size <= 0 or bench_config.iterations <= 0:
        logger.error("Payload size and iterations must be positive")
        return 1

    metrics = BenchmarkMetrics()
    try:
        result = run_benchmark(bench_config, metrics)
    except HexCodecError as e:
        logger.error(f"Benchmark failed: {e}")
        return 1

    print(result.summary())
    if args.prometheus:
        print(generate_latest(metrics.registry).decode('utf-8'), end='')
    return 0


COMMANDS = {
    "encode": cmd_encode,
    "decode": cmd_decode,
    "u64-encode": cmd_u64_encode,
    "u64-decode": cmd_u64_decode,
    "bench": cmd_bench,
}


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError, TypeError) as e:
        # json.JSONDecodeError is a ValueError
        logging.basicConfig(level=logging.INFO, format='%(message)s')
        logger.error(f"Failed to load configuration from {args.config}: {e}")
        return 1

    setup_logging(config, args.debug)

    try:
        return COMMANDS[args.command](args, config)
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1
