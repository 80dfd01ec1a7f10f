"""
Model Configuration Module
Centralizes the embedding network topology and training settings
"""

from typing import Dict, Any

# Import directory paths from data_config to avoid hardcoding
from .data_config import LOGS_DIR

# ============================================================================
# MODEL TYPES
# ============================================================================

AVAILABLE_MODELS = ["embedding_network"]
DEFAULT_MODEL = "embedding_network"

# ============================================================================
# EMBEDDING NETWORK CONFIGURATION
# ============================================================================

EMBEDDING_NETWORK_PARAMS = {
    # Embedding widths
    "carrier_embedding_dim": 8,
    "orig_dest_embedding_dim": 128,
    # Dense trunk
    "hidden_units": 256,
    "hidden_activation": "relu",
    "projection_units": 256,  # linear layer before residual re-injection
    "head_units": 128,
    "dropout_rate": 0.2,
    # Output
    "output_activation": "linear",
}

# ============================================================================
# TRAINING CONFIGURATION
# ============================================================================

TRAINING_CONFIG = {
    "optimizer": "adam",  # default hyperparameters
    "loss": "mse",
    "batch_size": 256,
    "epochs": 10,
    "validation_split": 0.2,  # monitoring only, never used for test scoring
    "verbose": 2,
    "random_state": 42,
}

# ============================================================================
# REPORTING CONFIGURATION
# ============================================================================

REPORT_CONFIG = {
    "n_buckets": 10,  # deciles of predicted delay
    "figsize": (10, 5),
    "dpi": 100,
    "top_n_carriers": 10,
}

# ============================================================================
# EXPERIMENT TRACKING
# ============================================================================

EXPERIMENT_TRACKING = {
    "enabled": True,
    "log_dir": LOGS_DIR / "experiments",
}

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def get_model_config(model_type: str = DEFAULT_MODEL) -> Dict[str, Any]:
    """
    Get model configuration based on model type

    Args:
        model_type: 'embedding_network'

    Returns:
        Dictionary with network parameters and training config
    """
    if model_type not in AVAILABLE_MODELS:
        raise ValueError(
            f"Unknown model type: {model_type}. Available: {AVAILABLE_MODELS}"
        )

    return {
        "params": dict(EMBEDDING_NETWORK_PARAMS),
        "training_config": dict(TRAINING_CONFIG),
    }
