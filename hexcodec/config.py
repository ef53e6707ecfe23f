"""
Configuration management for the hexcodec tools.
"""
import json
import logging
import os
from dataclasses import dataclass, asdict


@dataclass
class FormatConfig:
    """Output formatting."""
    skip_leading_zeroes: bool = False
    line_width: int = 0  # 0 disables wrapping


@dataclass
class BenchmarkConfig:
    """Benchmark configuration."""
    payload_size: int = 1024 * 1024  # 1MB
    iterations: int = 20
    seed: int = 0
    max_memory_growth_mb: int = 64


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    format: str = "%(message)s"


@dataclass
class Config:
    """Main configuration."""
    format: FormatConfig
    benchmark: BenchmarkConfig
    logging: LoggingConfig

    @classmethod
    def default(cls) -> 'Config':
        """Create default configuration."""
        return cls(
            format=FormatConfig(),
            benchmark=BenchmarkConfig(),
            logging=LoggingConfig()
        )

    @classmethod
    def from_file(cls, path: str) -> 'Config':
        """Load configuration from JSON file."""
        with open(path, 'r') as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Configuration must be a JSON object, got {type(data).__name__}")

        return cls(
            format=FormatConfig(**data.get('format', {})),
            benchmark=BenchmarkConfig(**data.get('benchmark', {})),
            logging=LoggingConfig(**data.get('logging', {}))
        )

    def validate(self):
        """Raise ValueError if any setting is out of range."""
        if self.format.line_width < 0:
            raise ValueError(f"line_width must be >= 0, got {self.format.line_width}")
        if self.benchmark.payload_size <= 0:
            raise ValueError(f"payload_size must be positive, got {self.benchmark.payload_size}")
        if self.benchmark.iterations <= 0:
            raise ValueError(f"iterations must be positive, got {self.benchmark.iterations}")
        if not isinstance(self.logging.level, str):
            raise ValueError(f"Logging level must be a name, got {self.logging.level!r}")
        if not isinstance(logging.getLevelName(self.logging.level.upper()), int):
            raise ValueError(f"Unknown logging level: {self.logging.level}")

    def to_file(self, path: str):
        """Save configuration to JSON file."""
        os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'format': asdict(self.format),
            'benchmark': asdict(self.benchmark),
            'logging': asdict(self.logging)
        }
