from typing import Optional, Protocol

from .schemas import PriceHistory


class PriceConnector(Protocol):
    """Protocol for sources that hand a finished price history to the core."""

    def load_history(self, symbol: Optional[str] = None) -> PriceHistory:
        ...
