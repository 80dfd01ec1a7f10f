from .data_loader import FlightDataLoader, load_flights, normalize_columns
from .data_cleanser import DataCleanser, clean_flight_data

__all__ = [
    "FlightDataLoader",
    "load_flights",
    "normalize_columns",
    "DataCleanser",
    "clean_flight_data",
]
