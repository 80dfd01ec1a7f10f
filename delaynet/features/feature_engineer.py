"""
Feature Engineering Module

Two-phase categorical encoding plus numeric scaling:

1. Fit phase - vocabularies are computed from the full filtered dataset
   (train + test) and returned as plain values; scalers are computed from the
   training partition only.
2. Apply phase - the fitted vocabularies/scalers are passed in explicitly and
   applied identically to every partition.

Known limitation: orig_dest is origin + dest with no delimiter, so ("AB", "C")
and ("A", "BC") map to the same key.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Union

import numpy as np
import pandas as pd

from config.data_config import (
    ORIGIN_COLUMN,
    DEST_COLUMN,
    ORIG_DEST_COLUMN,
    CATEGORICAL_COLUMNS,
    NUMERIC_COLUMNS,
    TARGET_COLUMN,
    UNKNOWN_TOKEN,
)
from .scaler import Scaler, fit_scaler, apply_scaler


def derive_orig_dest(
    origin: Union[str, pd.Series], dest: Union[str, pd.Series]
) -> Union[str, pd.Series]:
    """
    Concatenate origin and destination codes with no delimiter.

    Works on scalars or element-wise on Series.
    """
    if isinstance(origin, pd.Series) or isinstance(dest, pd.Series):
        return pd.Series(origin).astype(str) + pd.Series(dest).astype(str)
    return f"{origin}{dest}"


@dataclass(frozen=True)
class CategoricalVocabulary:
    """
    Ordered mapping from observed value to dense zero-based index.

    values holds categories in first-seen order; the index of a value is its
    position. With reserve_unknown=True an extra UNKNOWN_TOKEN slot is
    appended and unseen values encode to it instead of raising.
    """

    column: str
    values: tuple
    reserve_unknown: bool = False
    _index: Dict[str, int] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        values = tuple(self.values)
        if self.reserve_unknown and UNKNOWN_TOKEN not in values:
            values = values + (UNKNOWN_TOKEN,)
        if len(set(values)) != len(values):
            raise ValueError(f"Vocabulary for '{self.column}' has duplicate values")
        object.__setattr__(self, "values", values)
        object.__setattr__(self, "_index", {v: i for i, v in enumerate(values)})

    @property
    def size(self) -> int:
        return len(self.values)

    @property
    def unknown_index(self) -> Optional[int]:
        return self._index[UNKNOWN_TOKEN] if self.reserve_unknown else None

    def __len__(self) -> int:
        return self.size

    def decode(self, codes: Iterable[int]) -> List:
        """Map integer codes back to their category values."""
        decoded = []
        for code in codes:
            code = int(code)
            if code < 0 or code >= self.size:
                raise ValueError(
                    f"Code {code} out of range for '{self.column}' "
                    f"vocabulary of size {self.size}"
                )
            decoded.append(self.values[code])
        return decoded

    def to_dict(self) -> Dict[str, object]:
        return {
            "column": self.column,
            "values": list(self.values),
            "reserve_unknown": self.reserve_unknown,
        }


def build_vocabulary(
    values: Iterable, column: str = "", reserve_unknown: bool = False
) -> CategoricalVocabulary:
    """
    Build a vocabulary from observed values in first-seen order.

    Args:
        values: Observed category values (unsplit dataset)
        column: Column name the vocabulary belongs to
        reserve_unknown: Append an UNKNOWN_TOKEN slot for unseen values

    Returns:
        CategoricalVocabulary
    """
    series = values if isinstance(values, pd.Series) else pd.Series(list(values))
    unique_values = pd.unique(series.astype(object))
    return CategoricalVocabulary(
        column=column,
        values=tuple(unique_values.tolist()),
        reserve_unknown=reserve_unknown,
    )


def encode_categorical(
    column: Iterable, vocabulary: CategoricalVocabulary
) -> np.ndarray:
    """
    Map each value to its index in a fixed vocabulary.

    Args:
        column: Values to encode
        vocabulary: Fitted vocabulary

    Returns:
        int64 array of codes, same length/order as the input

    Raises:
        ValueError: If a value is absent and the vocabulary reserves no
            unknown slot
    """
    series = column if isinstance(column, pd.Series) else pd.Series(list(column))
    series = series.astype(object)
    codes = series.map(vocabulary._index)

    unseen = codes.isna()
    if unseen.any():
        if not vocabulary.reserve_unknown:
            examples = series[unseen].unique()[:5].tolist()
            raise ValueError(
                f"{int(unseen.sum())} values not in '{vocabulary.column}' "
                f"vocabulary, e.g. {examples}"
            )
        codes = codes.fillna(vocabulary.unknown_index)

    return codes.to_numpy(dtype=np.int64)


class FeatureEngineer:
    """
    Feature pipeline for the embedding network.

    Holds no fitted state: vocabularies and scalers are returned from the
    fit methods and passed back into the apply methods.
    """

    def __init__(self, reserve_unknown: bool = False, log_level: str = "INFO"):
        """
        Initialize feature engineer.

        Args:
            reserve_unknown: Give vocabularies an UNKNOWN slot for unseen values
            log_level: Logging level
        """
        self.reserve_unknown = reserve_unknown
        self.engineered_features = []

        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(getattr(logging, log_level))

    def create_orig_dest(self, df: pd.DataFrame) -> pd.DataFrame:
        """Add the orig_dest column (origin + dest, no delimiter)."""
        df = df.copy()
        df[ORIG_DEST_COLUMN] = derive_orig_dest(
            df[ORIGIN_COLUMN], df[DEST_COLUMN]
        ).to_numpy()

        n_routes = df[ORIG_DEST_COLUMN].nunique()
        self.logger.info(f"Derived '{ORIG_DEST_COLUMN}' ({n_routes:,} distinct pairs)")
        self.engineered_features.append(ORIG_DEST_COLUMN)

        return df

    def fit_vocabularies(
        self, df: pd.DataFrame, columns: Optional[List[str]] = None
    ) -> Dict[str, CategoricalVocabulary]:
        """
        Build vocabularies from the full (unsplit) dataset.

        Args:
            df: Filtered dataset with orig_dest already derived
            columns: Categorical columns (default: CATEGORICAL_COLUMNS)

        Returns:
            {column: CategoricalVocabulary}
        """
        columns = CATEGORICAL_COLUMNS if columns is None else columns

        vocabularies = {}
        for col in columns:
            vocabularies[col] = build_vocabulary(
                df[col], column=col, reserve_unknown=self.reserve_unknown
            )
            self.logger.info(f"Vocabulary '{col}': {vocabularies[col].size:,} entries")

        return vocabularies

    def encode_categorical_features(
        self, df: pd.DataFrame, vocabularies: Dict[str, CategoricalVocabulary]
    ) -> pd.DataFrame:
        """Add '<col>_code' integer columns using the given vocabularies."""
        df = df.copy()
        for col, vocab in vocabularies.items():
            df[f"{col}_code"] = encode_categorical(df[col], vocab)
            self.engineered_features.append(f"{col}_code")

        self.logger.info(f"Encoded {len(vocabularies)} categorical features")
        return df

    def fit_scalers(
        self, train_df: pd.DataFrame, columns: Optional[List[str]] = None
    ) -> Dict[str, Scaler]:
        """
        Fit one scaler per numeric column from the training partition only.

        Args:
            train_df: Training partition
            columns: Columns to scale (default: NUMERIC_COLUMNS + target)

        Returns:
            {column: Scaler}
        """
        columns = NUMERIC_COLUMNS + [TARGET_COLUMN] if columns is None else columns

        scalers = {}
        for col in columns:
            scalers[col] = fit_scaler(train_df[col], column=col)
            self.logger.info(
                f"Scaler '{col}': center={scalers[col].center:.3f}, "
                f"scale={scalers[col].scale:.3f}"
            )

        return scalers

    def apply_scalers(
        self, df: pd.DataFrame, scalers: Dict[str, Scaler]
    ) -> pd.DataFrame:
        """Add '<col>_scaled' columns using the given scalers."""
        df = df.copy()
        for col, scaler in scalers.items():
            if col not in df.columns:
                continue
            df[f"{col}_scaled"] = apply_scaler(scaler, df[col])
            self.engineered_features.append(f"{col}_scaled")

        return df


def to_model_inputs(df: pd.DataFrame) -> Dict[str, np.ndarray]:
    """
    Build the named input arrays the network expects.

    Requires '<col>_code' columns for the categoricals and '<col>_scaled'
    columns for the numeric features.

    Returns:
        {input_name: (n, 1) array}
    """
    inputs = {}
    for col in NUMERIC_COLUMNS:
        inputs[col] = df[f"{col}_scaled"].to_numpy(dtype=np.float32).reshape(-1, 1)
    for col in CATEGORICAL_COLUMNS:
        inputs[col] = df[f"{col}_code"].to_numpy(dtype=np.int64).reshape(-1, 1)
    return inputs
