from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class PricePoint:
    timestamp: datetime
    close: float
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    volume: float = 0.0


@dataclass
class PriceHistory:
    """Ascending OHLCV rows for one symbol, as handed to the forecasting core."""

    symbol: str
    points: List[PricePoint] = field(default_factory=list)

    def closes(self) -> List[float]:
        return [p.close for p in self.points]

    def timestamps(self) -> List[datetime]:
        return [p.timestamp for p in self.points]

    def latest_price(self) -> float:
        return self.points[-1].close


@dataclass
class TimelinePoint:
    date: Optional[datetime]
    actual: Optional[float]
    predicted: Optional[float]
