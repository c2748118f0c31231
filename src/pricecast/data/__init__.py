# Price data containers and loaders
from .interfaces import PriceConnector
from .schemas import PriceHistory, PricePoint, TimelinePoint
from .csv_connector import CsvPriceConnector

__all__ = [
    "PriceConnector",
    "PriceHistory",
    "PricePoint",
    "TimelinePoint",
    "CsvPriceConnector",
]
