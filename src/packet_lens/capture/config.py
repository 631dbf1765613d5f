from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_BUFFER_CAPACITY = 50_000
DEFAULT_FILTER_DEBOUNCE_MS = 200
DEFAULT_FORMAT_CACHE_SIZE = 10_000


@dataclass(slots=True)
class RuntimeConfig:
    buffer_capacity: int = DEFAULT_BUFFER_CAPACITY
    filter_debounce_ms: int = DEFAULT_FILTER_DEBOUNCE_MS
    format_cache_size: int = DEFAULT_FORMAT_CACHE_SIZE
    mock_batch_size: int = 25
    mock_interval_ms: int = 250
    hold_details: bool = False  # mock only: keep detail responses until released

    def to_log_string(self) -> str:
        return (
            f"buffer_capacity={self.buffer_capacity} "
            f"filter_debounce_ms={self.filter_debounce_ms} "
            f"format_cache_size={self.format_cache_size} "
            f"mock_batch_size={self.mock_batch_size} mock_interval_ms={self.mock_interval_ms}"
        )


def load_runtime_config() -> RuntimeConfig:
    return RuntimeConfig(
        buffer_capacity=_env_positive_int("PACKET_LENS_BUFFER_CAPACITY", DEFAULT_BUFFER_CAPACITY),
        filter_debounce_ms=_env_positive_int(
            "PACKET_LENS_FILTER_DEBOUNCE_MS", DEFAULT_FILTER_DEBOUNCE_MS
        ),
        format_cache_size=_env_positive_int(
            "PACKET_LENS_FORMAT_CACHE_SIZE", DEFAULT_FORMAT_CACHE_SIZE
        ),
        mock_batch_size=_env_positive_int("PACKET_LENS_MOCK_BATCH_SIZE", 25),
        mock_interval_ms=_env_positive_int("PACKET_LENS_MOCK_INTERVAL_MS", 250),
        hold_details=_env_bool("PACKET_LENS_HOLD_DETAILS", False),
    )


def _env_positive_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}
