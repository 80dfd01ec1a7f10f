"""
Model Predictor - Inference-Only Wrapper
Scores flights with a trained network and returns delays in minutes (no training)
"""

import logging
from typing import Dict

import numpy as np
import pandas as pd
from tensorflow.keras import Model

from config.data_config import NUMERIC_COLUMNS, TARGET_COLUMN
from delaynet.features.feature_engineer import (
    CategoricalVocabulary,
    FeatureEngineer,
    to_model_inputs,
)
from delaynet.features.scaler import Scaler, invert_scaler


def predict(
    model: Model,
    inputs: Dict[str, np.ndarray],
    target_scaler: Scaler,
    batch_size: int = 1024,
) -> np.ndarray:
    """
    Score model inputs and descale to arrival-delay minutes.

    Args:
        model: Trained embedding network
        inputs: Named input arrays (see to_model_inputs)
        target_scaler: Scaler fitted on training arr_delay

    Returns:
        1-D array with one prediction (minutes) per input row
    """
    n_rows = len(next(iter(inputs.values())))
    scaled = np.asarray(
        model.predict(inputs, batch_size=batch_size, verbose=0), dtype=float
    ).reshape(-1)

    if scaled.shape[0] != n_rows:
        raise ValueError(
            f"Model returned {scaled.shape[0]} predictions for {n_rows} rows"
        )

    return invert_scaler(target_scaler, scaled)


class ModelPredictor:
    """
    Inference-only model wrapper

    Features:
    - Holds a trained model with the vocabularies and scalers it was fitted with
    - Encodes and scales raw flight records exactly as during training
    - Returns predictions in original delay minutes

    Usage:
        predictor = ModelPredictor(model, vocabularies, scalers)
        minutes = predictor.predict(df_new)
    """

    def __init__(
        self,
        model: Model,
        vocabularies: Dict[str, CategoricalVocabulary],
        scalers: Dict[str, Scaler],
        log_level: str = "INFO",
    ):
        """
        Initialize predictor

        Args:
            model: Trained embedding network
            vocabularies: {column: vocabulary} used to encode categoricals
            scalers: {column: scaler}, must include the target column
            log_level: Logging level
        """
        if TARGET_COLUMN not in scalers:
            raise ValueError(f"scalers must include the target '{TARGET_COLUMN}'")

        self.model = model
        self.vocabularies = vocabularies
        self.scalers = scalers
        self.engineer = FeatureEngineer(log_level=log_level)

        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(getattr(logging, log_level))

    def prepare_inputs(self, df: pd.DataFrame) -> Dict[str, np.ndarray]:
        """Derive orig_dest, encode and scale a cleaned flight table."""
        feature_scalers = {col: self.scalers[col] for col in NUMERIC_COLUMNS}

        df = self.engineer.create_orig_dest(df)
        df = self.engineer.encode_categorical_features(df, self.vocabularies)
        df = self.engineer.apply_scalers(df, feature_scalers)
        return to_model_inputs(df)

    def predict(self, df: pd.DataFrame) -> np.ndarray:
        """
        Predict arrival delay in minutes for each row of df.

        Args:
            df: Cleaned flight records (origin, dest, carrier, dep_delay, distance)

        Returns:
            1-D array of predicted delays, same length as df
        """
        inputs = self.prepare_inputs(df)
        predictions = predict(self.model, inputs, self.scalers[TARGET_COLUMN])
        self.logger.info(f"Scored {len(predictions):,} flights")
        return predictions
