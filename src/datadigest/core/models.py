"""Enumerations shared across configuration, dispatch and results."""

from enum import StrEnum


class Operation(StrEnum):
    """The fixed set of digest operations."""

    ANALYZE = "analyze"
    TRANSFORM = "transform"
    AGGREGATE = "aggregate"
