from .temporal_split import split, is_test_month
from .temporal_validation import TemporalValidator

__all__ = [
    "split",
    "is_test_month",
    "TemporalValidator",
]
