import csv
import logging
import math
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from .interfaces import PriceConnector
from .schemas import PriceHistory, PricePoint

logger = logging.getLogger(__name__)


class CsvPriceConnector(PriceConnector):
    """
    Loads a close-price history from a CSV file with fixed column names.

    Expects a ``date`` (or ``timestamp``) column in ISO format and a ``close``
    column; ``open``, ``high``, ``low``, ``volume`` and ``symbol`` are optional.
    Rows whose close is missing, non-finite or zero are dropped.
    """

    def __init__(self, path: str | Path, timestamp_field: Optional[str] = None) -> None:
        self.path = Path(path)
        self.timestamp_field = timestamp_field

    def load_history(self, symbol: Optional[str] = None) -> PriceHistory:
        rows = self._load_rows()
        if not rows:
            raise ValueError(f"CSV file has no rows: {self.path}")
        ts_field = self.timestamp_field or ("date" if "date" in rows[0] else "timestamp")
        if ts_field not in rows[0] or "close" not in rows[0]:
            raise ValueError(f"CSV file must have '{ts_field}' and 'close' columns: {self.path}")

        points = []
        skipped = 0
        for row in rows:
            if symbol and row.get("symbol") not in (None, "", symbol):
                continue
            close = self._parse_float(row.get("close"))
            if close is None or close == 0:
                skipped += 1
                continue
            points.append(
                PricePoint(
                    timestamp=self._parse_ts(row[ts_field]),
                    close=close,
                    open=self._parse_float(row.get("open")),
                    high=self._parse_float(row.get("high")),
                    low=self._parse_float(row.get("low")),
                    volume=self._parse_float(row.get("volume")) or 0.0,
                )
            )
        if skipped:
            logger.warning("Dropped %d row(s) without a usable close from %s", skipped, self.path)
        if not points:
            raise ValueError(f"No price rows found for {symbol or 'any symbol'} in {self.path}")
        points.sort(key=lambda p: p.timestamp)
        return PriceHistory(symbol=symbol or self.path.stem, points=points)

    def _load_rows(self) -> list[dict]:
        if not self.path.exists():
            raise FileNotFoundError(f"CSV data file not found: {self.path}")
        with self.path.open("r", newline="") as f:
            reader: Iterable[dict] = csv.DictReader(f)
            return list(reader)

    @staticmethod
    def _parse_float(value: Optional[str]) -> Optional[float]:
        if value is None or value == "":
            return None
        try:
            number = float(value)
        except ValueError:
            return None
        return number if math.isfinite(number) else None

    @staticmethod
    def _parse_ts(value: str) -> datetime:
        # fromisoformat before 3.11 rejects a trailing Z
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
