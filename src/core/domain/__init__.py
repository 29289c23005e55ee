"""
Domain models and value objects.

Contains the FixedPoint value object and its decimal formatting options.
"""

from src.core.domain.fixed_point import (
    CANONICAL_FORMAT,
    CONTRACT_FORMAT,
    DEFAULT_FORMAT,
    DecimalFormat,
    FixedPoint,
    dump_batch,
    load_batch,
)

__all__ = [
    # Formatting
    "CANONICAL_FORMAT",
    "CONTRACT_FORMAT",
    "DEFAULT_FORMAT",
    "DecimalFormat",
    # Value object
    "FixedPoint",
    # Batch contract
    "dump_batch",
    "load_batch",
]
