"""
Embedding network definition for arrival-delay regression.

Graph (all layers named):

    carrier   -> Embedding(n_carrier, 8)    -> Flatten --+
    orig_dest -> Embedding(n_orig_dest, 128) -> Flatten --+
    dep_delay ----------------------------------------------+-> features_concat
    distance  ----------------------------------------------+
        -> Dense(256, relu) -> Dropout(0.2) -> Dense(256, linear)
        -> residual_concat [+ dep_delay]
        -> Dropout(0.2) -> Dense(128) -> Dense(1, linear)
"""

from typing import Any, Dict, Optional

import tensorflow as tf
from tensorflow.keras import layers, Model

from config.data_config import CARRIER_COLUMN, ORIG_DEST_COLUMN
from config.model_config import EMBEDDING_NETWORK_PARAMS

INPUT_NAMES = ("dep_delay", "distance", CARRIER_COLUMN, ORIG_DEST_COLUMN)
OUTPUT_NAME = "arr_delay_scaled"


def _embedded_input(
    name: str, vocab_size: int, embedding_dim: int
) -> tuple:
    """Integer index input -> Embedding -> Flatten."""
    index_input = layers.Input(shape=(1,), dtype="int32", name=name)
    embedded = layers.Embedding(
        input_dim=vocab_size, output_dim=embedding_dim, name=f"{name}_embedding"
    )(index_input)
    flat = layers.Flatten(name=f"{name}_flatten")(embedded)
    return index_input, flat


def build_embedding_network(
    carrier_vocab_size: int,
    orig_dest_vocab_size: int,
    params: Optional[Dict[str, Any]] = None,
) -> Model:
    """
    Build the (uncompiled) embedding network.

    Args:
        carrier_vocab_size: Number of carrier codes (embedding rows)
        orig_dest_vocab_size: Number of orig_dest keys (embedding rows)
        params: Overrides for EMBEDDING_NETWORK_PARAMS

    Returns:
        Keras functional Model with inputs named after INPUT_NAMES
    """
    if carrier_vocab_size < 1 or orig_dest_vocab_size < 1:
        raise ValueError(
            f"Vocabulary sizes must be positive, got carrier={carrier_vocab_size}, "
            f"orig_dest={orig_dest_vocab_size}"
        )

    p = {**EMBEDDING_NETWORK_PARAMS, **(params or {})}

    dep_delay = layers.Input(shape=(1,), dtype="float32", name="dep_delay")
    distance = layers.Input(shape=(1,), dtype="float32", name="distance")
    carrier, carrier_vec = _embedded_input(
        CARRIER_COLUMN, carrier_vocab_size, p["carrier_embedding_dim"]
    )
    orig_dest, orig_dest_vec = _embedded_input(
        ORIG_DEST_COLUMN, orig_dest_vocab_size, p["orig_dest_embedding_dim"]
    )

    x = layers.Concatenate(name="features_concat")(
        [dep_delay, distance, carrier_vec, orig_dest_vec]
    )
    x = layers.Dense(p["hidden_units"], activation=p["hidden_activation"], name="hidden")(x)
    x = layers.Dropout(p["dropout_rate"], name="hidden_dropout")(x)
    x = layers.Dense(p["projection_units"], activation="linear", name="projection")(x)

    # Re-inject the scaled departure delay next to the learned projection
    x = layers.Concatenate(name="residual_concat")([x, dep_delay])
    x = layers.Dropout(p["dropout_rate"], name="residual_dropout")(x)
    x = layers.Dense(p["head_units"], name="head")(x)
    output = layers.Dense(1, activation=p["output_activation"], name=OUTPUT_NAME)(x)

    return Model(
        inputs={
            "dep_delay": dep_delay,
            "distance": distance,
            CARRIER_COLUMN: carrier,
            ORIG_DEST_COLUMN: orig_dest,
        },
        outputs=output,
        name="arrival_delay_embedding_network",
    )


def compile_network(
    model: Model, optimizer: str = "adam", loss: str = "mse"
) -> Model:
    """Compile with a default-hyperparameter optimizer and MSE loss."""
    model.compile(
        optimizer=tf.keras.optimizers.get(optimizer),
        loss=loss,
        metrics=[tf.keras.metrics.MeanAbsoluteError(name="mae")],
    )
    return model
