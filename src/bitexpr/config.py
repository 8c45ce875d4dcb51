"""Configuration for encode and decode calls.

This module provides the CodecConfig dataclass that tunes how strictly the
encoder treats caller values and how the decoder reports leftover input.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CodecConfig:
    """Options for a single encode or decode call.

    Attributes:
        initial_buffer_bytes: Starting capacity of the writer's byte arena
            (default 8). The arena doubles whenever it fills up.

        strict_arrays: If True, an array value whose length differs from the
            resolved length is an EncodeError (default False). Otherwise short
            arrays are padded with element defaults and long arrays truncated.

        validate_values: If True, the whole value tree is checked with
            value_matches_type() before anything is written (default False).

        max_bytes: Upper bound on the encoded size in bytes, or None for no
            limit (default None).

        warn_trailing_bytes: Log a warning when decoding leaves whole bytes
            unread after the root struct (default True).

    Examples:
        ```python
        from bitexpr import CodecConfig, encode

        config = CodecConfig(strict_arrays=True, max_bytes=64)
        data = encode(schema, value, "Message", config=config)
        ```
    """

    initial_buffer_bytes: int = 8
    strict_arrays: bool = False
    validate_values: bool = False
    max_bytes: int | None = None
    warn_trailing_bytes: bool = True

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.initial_buffer_bytes <= 0:
            raise ValueError(
                f"initial_buffer_bytes must be > 0, got {self.initial_buffer_bytes}"
            )

        if self.max_bytes is not None and self.max_bytes < 0:
            raise ValueError(f"max_bytes must be >= 0, got {self.max_bytes}")


DEFAULT_CONFIG = CodecConfig()
