"""Stock price lookup tool.

A mock quote source: prices come from a fixed table so the assistant's
function-calling round trip can be exercised without a market data feed.
"""

import logging
from typing import Any

from domain.exceptions import ToolExecutionError

logger = logging.getLogger(__name__)

GET_STOCK_PRICE = "getStockPrice"

GET_STOCK_PRICE_DESCRIPTION = "Get the latest stock price for a ticker symbol."

GET_STOCK_PRICE_PARAMETERS: dict[str, Any] = {
    "type": "object",
    "properties": {
        "symbol": {
            "type": "string",
            "description": "The ticker symbol of the stock, e.g. AAPL or MSFT",
        },
    },
    "required": ["symbol"],
}

MOCK_QUOTES: dict[str, float] = {
    "AAPL": 123.45,
    "MSFT": 415.20,
    "GOOGL": 171.05,
    "AMZN": 186.40,
    "NVDA": 121.79,
    "TSLA": 248.50,
}


async def execute_get_stock_price(arguments: dict[str, Any]) -> str:
    """Execute the getStockPrice tool.

    Raises:
        ToolExecutionError: If the symbol is blank or not quoted
    """
    symbol = str(arguments.get("symbol") or "").strip().upper()
    if not symbol:
        raise ToolExecutionError("Symbol is required", tool_name=GET_STOCK_PRICE)

    price = MOCK_QUOTES.get(symbol)
    if price is None:
        raise ToolExecutionError(f"No quote available for symbol: {symbol}", tool_name=GET_STOCK_PRICE)

    logger.info(f"📈 Quote for {symbol}: ${price:.2f}")
    return f"${price:.2f}"
