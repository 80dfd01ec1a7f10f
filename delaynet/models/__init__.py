"""
Models Package
Provides network definition, training, evaluation, and inference capabilities
"""

from .network import build_embedding_network, compile_network
from .trainer import EmbeddingModelTrainer, train_embedding_network
from .evaluator import ModelEvaluator, compute_metrics, decile_calibration_table
from .predictor import ModelPredictor, predict

__all__ = [
    # Network
    "build_embedding_network",
    "compile_network",
    # Training
    "EmbeddingModelTrainer",
    "train_embedding_network",
    # Evaluation
    "ModelEvaluator",
    "compute_metrics",
    "decile_calibration_table",
    # Inference
    "ModelPredictor",
    "predict",
]
