from .feature_engineer import (
    FeatureEngineer,
    CategoricalVocabulary,
    build_vocabulary,
    derive_orig_dest,
    encode_categorical,
    to_model_inputs,
)
from .scaler import Scaler, fit_scaler, apply_scaler, invert_scaler

__all__ = [
    "FeatureEngineer",
    "CategoricalVocabulary",
    "build_vocabulary",
    "derive_orig_dest",
    "encode_categorical",
    "to_model_inputs",
    "Scaler",
    "fit_scaler",
    "apply_scaler",
    "invert_scaler",
]
