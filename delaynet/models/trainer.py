"""
Model Trainer - Embedding Network Training Pipeline
Feature preparation, calendar split, training on scaled arrival delay and scoring
"""

import pandas as pd
import numpy as np
from pathlib import Path
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple
import logging
import json
import hashlib
import time

from tensorflow.keras import Model

from config.model_config import EXPERIMENT_TRACKING, get_model_config
from config.data_config import (
    CALIBRATION_PLOT_PATH,
    CARRIER_COLUMN,
    NUMERIC_COLUMNS,
    ORIG_DEST_COLUMN,
    TARGET_COLUMN,
    TEST_MONTH_CUTOFF,
)
from delaynet.features.feature_engineer import FeatureEngineer, to_model_inputs
from delaynet.features.scaler import apply_scaler
from delaynet.models.network import build_embedding_network, compile_network
from delaynet.models.evaluator import ModelEvaluator
from delaynet.models.predictor import ModelPredictor, predict
from delaynet.validation.temporal_split import split
from delaynet.validation.temporal_validation import TemporalValidator


class EmbeddingModelTrainer:
    """
    Trainer for the arrival-delay embedding network

    Features:
    - Vocabularies built once from the full filtered dataset
    - Calendar split (month < cutoff -> train), never shuffled
    - Scalers fitted on the training partition only
    - Keras fit with a 20% monitoring hold-out
    - Scoring descaled back to minutes, decile calibration, experiment log

    Usage:
        trainer = EmbeddingModelTrainer()
        results = trainer.train_and_evaluate(clean_df)
    """

    def __init__(
        self,
        params: Optional[Dict[str, Any]] = None,
        training_config: Optional[Dict[str, Any]] = None,
        test_month_cutoff: int = TEST_MONTH_CUTOFF,
        reserve_unknown: bool = False,
        log_level: str = "INFO",
    ):
        """
        Initialize trainer

        Args:
            params: Overrides for the network parameters
            training_config: Overrides for the training settings
            test_month_cutoff: First month of the test partition
            reserve_unknown: Give vocabularies an UNKNOWN slot
            log_level: Logging level
        """
        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(getattr(logging, log_level))

        if not self.logger.hasHandlers():
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

        config = get_model_config()
        self.model_params = {**config["params"], **(params or {})}
        self.training_config = {**config["training_config"], **(training_config or {})}
        self.test_month_cutoff = test_month_cutoff
        self.log_level = log_level

        self.engineer = FeatureEngineer(
            reserve_unknown=reserve_unknown, log_level=log_level
        )
        self.evaluator = ModelEvaluator(log_level=log_level)
        self.model = None

        self.logger.info("EmbeddingModelTrainer initialized")

    def prepare_data(self, df: pd.DataFrame) -> Dict[str, Any]:
        """
        Derive, encode, split and scale

        Args:
            df: Cleaned flight records

        Returns:
            Dict with train_df, test_df, vocabularies, scalers
        """
        self.logger.info("=" * 60)
        self.logger.info("DATA PREPARATION")
        self.logger.info("=" * 60)

        df = self.engineer.create_orig_dest(df)

        # Vocabularies come from all records, before the split
        vocabularies = self.engineer.fit_vocabularies(df)
        df = self.engineer.encode_categorical_features(df, vocabularies)

        train_df, test_df = split(df, cutoff=self.test_month_cutoff)

        # Scalers come from training records only
        scalers = self.engineer.fit_scalers(train_df)
        train_df = self.engineer.apply_scalers(train_df, scalers)
        test_df = self.engineer.apply_scalers(test_df, scalers)

        return {
            "train_df": train_df,
            "test_df": test_df,
            "vocabularies": vocabularies,
            "scalers": scalers,
        }

    def create_model(self, vocabularies: Dict) -> Model:
        """
        Create and compile the network sized to the vocabularies

        Returns:
            Compiled, untrained model
        """
        model = build_embedding_network(
            carrier_vocab_size=vocabularies[CARRIER_COLUMN].size,
            orig_dest_vocab_size=vocabularies[ORIG_DEST_COLUMN].size,
            params=self.model_params,
        )
        compile_network(
            model,
            optimizer=self.training_config["optimizer"],
            loss=self.training_config["loss"],
        )
        self.logger.info(
            f"Created {model.name} with {model.count_params():,} parameters"
        )
        return model

    def train(
        self,
        model: Model,
        train_inputs: Dict[str, np.ndarray],
        y_train_scaled: np.ndarray,
    ) -> Tuple[Model, Dict[str, list], float]:
        """
        Fit the network on scaled arrival delay

        Args:
            model: Compiled model
            train_inputs: Named training input arrays
            y_train_scaled: Scaled training target

        Returns:
            (trained_model, history, training_time_sec)
        """
        self.logger.info("=" * 60)
        self.logger.info("TRAINING EMBEDDING NETWORK")
        self.logger.info("=" * 60)

        n_samples = len(y_train_scaled)
        self.logger.info(
            f"Training on {n_samples:,} samples "
            f"(batch={self.training_config['batch_size']}, "
            f"epochs={self.training_config['epochs']}, "
            f"monitoring split={self.training_config['validation_split']:.0%})"
        )
        start_time = time.time()

        try:
            history = model.fit(
                train_inputs,
                y_train_scaled,
                batch_size=self.training_config["batch_size"],
                epochs=self.training_config["epochs"],
                validation_split=self.training_config["validation_split"],
                verbose=self.training_config["verbose"],
            )
            training_time = time.time() - start_time

            self.logger.info(
                f"✓ Training complete in {training_time:.2f} seconds ({training_time / 60:.2f} minutes)"
            )

        except MemoryError as e:
            self.logger.error(f"❌ Out of memory during training: {e}")
            raise
        except Exception as e:
            self.logger.error(f"❌ Training failed: {e}")
            raise

        self.model = model
        return model, dict(history.history), training_time

    def score(
        self, model: Model, df: pd.DataFrame, scalers: Dict
    ) -> pd.DataFrame:
        """
        Predict a partition and attach predictions in minutes

        Returns:
            Copy of df with 'predicted_arr_delay'
        """
        predictions = predict(model, to_model_inputs(df), scalers[TARGET_COLUMN])
        scored = df.copy()
        scored["predicted_arr_delay"] = predictions
        return scored

    def compute_data_hash(self, inputs: Dict[str, np.ndarray], y: np.ndarray) -> str:
        """
        Compute SHA256 hash of the training arrays for reproducibility

        Returns:
            First 16 hex chars of the digest
        """
        hash_obj = hashlib.sha256()
        for name in sorted(inputs):
            hash_obj.update(np.ascontiguousarray(inputs[name]).tobytes())
        hash_obj.update(np.ascontiguousarray(y).tobytes())
        return hash_obj.hexdigest()[:16]

    def log_experiment(
        self,
        dataset_version: str,
        prepared: Dict[str, Any],
        metrics_train: Dict,
        metrics_test: Dict,
        training_time_sec: float,
        history: Dict[str, list],
        data_hash: str,
    ) -> Dict:
        """
        Create experiment log (summary only, no weights)

        Returns:
            Experiment log dict
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        return {
            "run_id": f"run_{timestamp}_embedding_network",
            "model_type": "EmbeddingNetwork",
            "dataset_version": dataset_version,
            "n_samples_train": len(prepared["train_df"]),
            "n_samples_test": len(prepared["test_df"]),
            "test_month_cutoff": self.test_month_cutoff,
            "vocabulary_sizes": {
                col: vocab.size for col, vocab in prepared["vocabularies"].items()
            },
            "scalers": {
                col: scaler.to_dict() for col, scaler in prepared["scalers"].items()
            },
            "hyperparameters": {
                "network": self.model_params,
                "training": self.training_config,
            },
            "metrics": {
                "train": metrics_train,
                "test": metrics_test,
                "training_time_sec": training_time_sec,
                "final_loss": history.get("loss", [None])[-1],
                "final_val_loss": history.get("val_loss", [None])[-1],
            },
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "data_hash": data_hash,
        }

    def save_experiment_log(
        self, experiment_log: Dict, log_dir: Optional[Path] = None
    ) -> Path:
        """
        Save experiment log to JSON

        Returns:
            Path to saved log
        """
        log_dir = Path(log_dir) if log_dir else EXPERIMENT_TRACKING["log_dir"]
        log_dir.mkdir(parents=True, exist_ok=True)

        log_path = log_dir / f"{experiment_log['run_id']}.json"
        with open(log_path, "w") as f:
            json.dump(experiment_log, f, indent=2, default=str)

        self.logger.info(f"✓ Experiment log saved to: {log_path}")
        return log_path

    def train_and_evaluate(
        self,
        df: pd.DataFrame,
        dataset_version: str = "flights_unknown",
        save_log: bool = EXPERIMENT_TRACKING["enabled"],
        plot_path: Optional[Path] = CALIBRATION_PLOT_PATH,
    ) -> Dict:
        """
        Complete training and evaluation pipeline

        Args:
            df: Cleaned flight records
            dataset_version: Dataset identifier for the experiment log
            save_log: Write the experiment log JSON
            plot_path: Where to save the calibration chart (None = don't save)

        Returns:
            Complete results dict
        """
        self.logger.info("=" * 60)
        self.logger.info("MODEL TRAINING PIPELINE: EMBEDDING NETWORK")
        self.logger.info("=" * 60)

        # Step 1: Features, split, scalers
        prepared = self.prepare_data(df)
        train_df, test_df = prepared["train_df"], prepared["test_df"]
        scalers = prepared["scalers"]

        train_inputs = to_model_inputs(train_df)
        y_train_scaled = apply_scaler(scalers[TARGET_COLUMN], train_df[TARGET_COLUMN])

        # Step 2: Train
        model = self.create_model(prepared["vocabularies"])
        model, history, training_time = self.train(model, train_inputs, y_train_scaled)

        # Step 3: Score both partitions in minutes
        self.logger.info("=" * 60)
        self.logger.info("EVALUATION")
        self.logger.info("=" * 60)

        train_scored = self.score(model, train_df, scalers)
        test_scored = self.score(model, test_df, scalers)

        metrics_train = self.evaluator.evaluate_regression(
            train_scored[TARGET_COLUMN], train_scored["predicted_arr_delay"]
        )
        self.evaluator.log_metrics(metrics_train, split="train")
        metrics_test = self.evaluator.evaluate_regression(
            test_scored[TARGET_COLUMN], test_scored["predicted_arr_delay"]
        )
        self.evaluator.log_metrics(metrics_test, split="test")

        # Step 4: Calibration and breakdowns
        calibration = self.evaluator.decile_calibration_table(
            test_scored[TARGET_COLUMN], test_scored["predicted_arr_delay"]
        )
        figure = self.evaluator.plot_calibration(calibration, output_path=plot_path)

        validator = TemporalValidator(log_level=self.log_level)
        by_month = validator.evaluate_by_month(test_scored)
        by_carrier = validator.evaluate_by_carrier(test_scored)

        # Step 5: Experiment log
        experiment_log = self.log_experiment(
            dataset_version=dataset_version,
            prepared=prepared,
            metrics_train=metrics_train,
            metrics_test=metrics_test,
            training_time_sec=training_time,
            history=history,
            data_hash=self.compute_data_hash(train_inputs, y_train_scaled),
        )
        log_path = self.save_experiment_log(experiment_log) if save_log else None

        self.logger.info("=" * 60)
        self.logger.info("PIPELINE COMPLETE")
        self.logger.info("=" * 60)
        self.logger.info(f"Test RMSE: {metrics_test['rmse']:.2f} min")
        self.logger.info(f"Test MAE:  {metrics_test['mae']:.2f} min")
        self.logger.info(f"Training Time: {training_time:.2f}s")

        return {
            "model": model,
            "predictor": ModelPredictor(
                model,
                prepared["vocabularies"],
                {col: scalers[col] for col in NUMERIC_COLUMNS + [TARGET_COLUMN]},
                log_level=self.log_level,
            ),
            "vocabularies": prepared["vocabularies"],
            "scalers": scalers,
            "history": history,
            "metrics_train": metrics_train,
            "metrics_test": metrics_test,
            "test_scored": test_scored,
            "calibration": calibration,
            "calibration_figure": figure,
            "by_month": by_month,
            "by_carrier": by_carrier,
            "training_time": training_time,
            "experiment_log": experiment_log,
            "log_path": log_path,
        }


# Convenience function


def train_embedding_network(
    df: pd.DataFrame, dataset_version: str = "flights_unknown"
) -> Dict:
    """Quick end-to-end training with default settings"""
    trainer = EmbeddingModelTrainer()
    return trainer.train_and_evaluate(df, dataset_version=dataset_version)
