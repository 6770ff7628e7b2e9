"""Fixed constants shared by the digest operations and harness."""

from typing import Final

# --- Configuration defaults ---

DEFAULT_USER_ID: Final = 0
DEFAULT_BATCH_SIZE: Final = 10
DEFAULT_OPERATION: Final = "analyze"
DEFAULT_DEBUG: Final = False

# --- Numeric behavior ---

# Transform treats values as living on a nominal 0-1000 scale
NORMALIZATION_DIVISOR: Final = 1000.0
NORMALIZED_SCALE: Final = 100.0

EMPTY_ANALYSIS_MESSAGE: Final = "no data to analyze"

# Aggregation buckets as (label, inclusive upper bound), in tie-break order.
# Values above the last bound fall into OVERFLOW_BUCKET.
RANGE_BUCKETS: Final[tuple[tuple[str, float], ...]] = (
    ("0-25", 25.0),
    ("26-50", 50.0),
    ("51-75", 75.0),
    ("76-100", 100.0),
)
OVERFLOW_BUCKET: Final = "100+"
BUCKET_LABELS: Final[tuple[str, ...]] = (
    *(label for label, _ in RANGE_BUCKETS),
    OVERFLOW_BUCKET,
)

# --- Sample dataset used when the caller supplies none ---

SAMPLE_DATA: Final[tuple[float, ...]] = (
    23.5, 67.2, 45.8, 89.1, 12.3, 78.9, 34.6, 56.7, 91.2, 28.4,
    73.1, 41.9, 85.3, 19.7, 62.8, 37.5, 94.6, 52.3, 76.4, 29.8,
    68.7, 43.2, 87.9, 15.6, 59.4, 82.1, 38.7, 71.5, 26.3, 64.8,
    49.2, 93.7, 31.4, 75.9, 18.6, 57.3, 86.4, 42.8, 69.1, 35.7,
    81.2, 24.9, 66.5, 48.7, 92.3, 33.1, 74.6, 21.8, 58.9, 84.7,
)  # fmt: skip
