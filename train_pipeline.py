"""
Arrival-Delay Embedding Network - Training Pipeline
====================================================
Loads the flight table, filters incomplete records, builds vocabularies
on all records, trains on months 1-10, scores months 11-12 and writes the
decile calibration chart.

Usage:
  python train_pipeline.py
"""

import warnings

warnings.filterwarnings("ignore", category=FutureWarning)

from config.data_config import (
    FLIGHTS_DATA_PATH,
    LOG_FILE,
    LOG_LEVEL,
    REPORTS_DIR,
    ensure_directories,
)
from config.model_config import TRAINING_CONFIG
from delaynet.data.data_loader import FlightDataLoader
from delaynet.data.data_cleanser import DataCleanser
from delaynet.models.trainer import EmbeddingModelTrainer
from delaynet.utils import Timer, set_random_seeds, setup_logging


def banner(logger, text):
    logger.info("=" * 60)
    logger.info(text)
    logger.info("=" * 60)


def main():
    ensure_directories()
    logger = setup_logging(LOG_FILE, LOG_LEVEL)
    set_random_seeds(TRAINING_CONFIG["random_state"])

    banner(logger, "STEP 1: LOAD")
    with Timer("Loading", logger):
        raw = FlightDataLoader(FLIGHTS_DATA_PATH).load()

    banner(logger, "STEP 2: CLEAN")
    cleanser = DataCleanser(log_level=LOG_LEVEL)
    flights = cleanser.full_pipeline(raw)

    banner(logger, "STEP 3: TRAIN & SCORE")
    trainer = EmbeddingModelTrainer(log_level=LOG_LEVEL)
    with Timer("Training pipeline", logger):
        results = trainer.train_and_evaluate(
            flights, dataset_version=FLIGHTS_DATA_PATH.name
        )

    banner(logger, "STEP 4: REPORT")
    results["calibration"].to_csv(REPORTS_DIR / "decile_calibration.csv", index=False)
    results["by_month"].to_csv(REPORTS_DIR / "test_by_month.csv", index=False)
    results["by_carrier"].to_csv(REPORTS_DIR / "test_by_carrier.csv", index=False)

    logger.info("Decile calibration (minutes):")
    for row in results["calibration"].itertuples(index=False):
        logger.info(
            f"  bucket {row.bucket + 1:2d}: n={row.n:,}  "
            f"actual={row.mean_actual:7.2f}  predicted={row.mean_predicted:7.2f}"
        )
    logger.info(f"Reports written to {REPORTS_DIR}")

    return results


if __name__ == "__main__":
    main()
