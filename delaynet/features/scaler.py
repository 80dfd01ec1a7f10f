"""
Numeric Scaler Module

A scaler is an explicit (center, scale) value: the mean and sample standard
deviation of a training column. Applying and inverting it are pure functions,
so the same scaler can be reused verbatim for train and test values.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Iterable, Union

import numpy as np
import pandas as pd

ArrayLike = Union[np.ndarray, pd.Series, Iterable[float]]


@dataclass(frozen=True)
class Scaler:
    """Affine normalization: scaled = (v - center) / scale."""

    center: float
    scale: float
    column: str = ""

    def transform(self, values: ArrayLike) -> np.ndarray:
        return apply_scaler(self, values)

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Scaler":
        return cls(
            center=float(data["center"]),
            scale=float(data["scale"]),
            column=str(data.get("column", "")),
        )


def _as_float_array(values: ArrayLike) -> np.ndarray:
    if isinstance(values, pd.Series):
        return values.to_numpy(dtype=float)
    return np.asarray(values, dtype=float)


def fit_scaler(values: ArrayLike, column: str = "") -> Scaler:
    """
    Fit a scaler from training values.

    center = arithmetic mean, scale = sample standard deviation (ddof=1).

    Args:
        values: Numeric training-partition values
        column: Name of the column the scaler belongs to (for messages/logs)

    Returns:
        Scaler

    Raises:
        ValueError: If there are fewer than two values, any value is not
            finite, or the resulting scale is zero
    """
    arr = _as_float_array(values).ravel()
    label = f"'{column}'" if column else "column"

    if arr.size == 0:
        raise ValueError(f"Cannot fit scaler for {label}: no training values")
    if arr.size < 2:
        raise ValueError(
            f"Cannot fit scaler for {label}: sample standard deviation needs at "
            f"least 2 values, got {arr.size}"
        )
    if not np.all(np.isfinite(arr)):
        raise ValueError(
            f"Cannot fit scaler for {label}: {int((~np.isfinite(arr)).sum())} "
            f"missing or non-finite values"
        )

    center = float(np.mean(arr))
    scale = float(np.std(arr, ddof=1))

    if not np.isfinite(scale) or scale == 0.0:
        raise ValueError(
            f"Cannot fit scaler for {label}: standard deviation is {scale} "
            f"(constant column), scaling would divide by zero"
        )

    return Scaler(center=center, scale=scale, column=column)


def apply_scaler(scaler: Scaler, values: ArrayLike) -> np.ndarray:
    """Return (values - center) / scale."""
    return (_as_float_array(values) - scaler.center) / scaler.scale


def invert_scaler(scaler: Scaler, values: ArrayLike) -> np.ndarray:
    """Return values * scale + center."""
    return _as_float_array(values) * scaler.scale + scaler.center
