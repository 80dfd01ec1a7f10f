"""
Source Code Root Package

Contains all source modules for the arrival-delay embedding network:
- data/: Flight table loading and cleansing
- features/: orig_dest derivation, categorical vocabularies, scalers
- validation/: Calendar train/test split and grouped error breakdowns
- models/: Network definition, training, scoring and calibration reporting
- utils.py: Seeding, logging and timing helpers
"""

__version__ = "1.0.0"
