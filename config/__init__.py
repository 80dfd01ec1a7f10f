"""
Arrival-Delay Embedding Network Configuration Package

This package contains all configuration modules for the system:
- data_config.py: Data sources, column schema, split cutoff and logging
- model_config.py: Network topology and training settings
"""

__version__ = "1.0.0"
