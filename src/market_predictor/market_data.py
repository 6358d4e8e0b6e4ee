"""
Market data collaborator - OHLCV candles from Binance

Klines come from the public REST API (no auth needed). Each kline row:
    [open_time, open, high, low, close, volume, close_time, ...]
"""

import csv
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import asdict, dataclass, field, fields

from .errors import DataFetchError

logger = logging.getLogger(__name__)

BINANCE_API = "https://api.binance.com/api/v3"
KLINES_URL = f"{BINANCE_API}/klines"
TICKER_URL = f"{BINANCE_API}/ticker/price"
EXCHANGE_INFO_URL = f"{BINANCE_API}/exchangeInfo"

DEFAULT_SYMBOL = "BTCUSDT"
REQUEST_TIMEOUT = 30
MAX_LIMIT = 1000

CSV_HEADER = ["timestamp", "open", "high", "low", "close", "volume"]


def _number(value, cast=float):
    if value is None or value == "":
        return cast(0)
    return cast(float(value))


@dataclass(frozen=True)
class Candle:
    """One OHLCV bucket. Missing fields default to 0."""

    timestamp: int = 0
    open: float = 0.0
    high: float = 0.0
    low: float = 0.0
    close: float = 0.0
    volume: float = 0.0

    @classmethod
    def from_kline(cls, row):
        values = list(row[:6]) + [None] * (6 - len(row[:6]))
        timestamp, open_price, high, low, close, volume = values
        return cls(
            timestamp=_number(timestamp, int),
            open=_number(open_price),
            high=_number(high),
            low=_number(low),
            close=_number(close),
            volume=_number(volume),
        )

    @classmethod
    def from_dict(cls, data):
        return cls(
            timestamp=_number(data.get("timestamp"), int),
            **{f.name: _number(data.get(f.name)) for f in fields(cls) if f.name != "timestamp"},
        )

    def to_dict(self):
        return asdict(self)


def is_valid_candle(candle):
    return candle is not None and candle.close > 0


def _get_json(url, params):
    full_url = f"{url}?{urllib.parse.urlencode(params)}"
    try:
        with urllib.request.urlopen(full_url, timeout=REQUEST_TIMEOUT) as response:
            return json.loads(response.read().decode())
    except (urllib.error.URLError, TimeoutError, ValueError) as e:
        logger.error("Error fetching %s: %s", full_url, e)
        raise DataFetchError(f"Request to {url} failed: {e}") from e


def fetch_klines(symbol=DEFAULT_SYMBOL, interval="4h", limit=500, start_time=None):
    """Fetch raw kline rows from Binance."""
    params = {"symbol": symbol, "interval": interval, "limit": min(limit, MAX_LIMIT)}
    if start_time:
        params["startTime"] = start_time

    data = _get_json(KLINES_URL, params)
    if not isinstance(data, list):
        raise DataFetchError(f"Unexpected klines payload for {symbol}: {data!r}")
    return data


def fetch_candles(symbol=DEFAULT_SYMBOL, interval="4h", limit=500):
    klines = fetch_klines(symbol, interval, limit)
    candles = [Candle.from_kline(k) for k in klines]
    logger.info("Fetched %d %s candles for %s", len(candles), interval, symbol)
    return candles


def fetch_4h(symbol=DEFAULT_SYMBOL, limit=500):
    return fetch_candles(symbol, "4h", limit)


def fetch_1d(symbol=DEFAULT_SYMBOL, limit=200):
    return fetch_candles(symbol, "1d", limit)


def fetch_latest_price(symbol=DEFAULT_SYMBOL):
    """Last traded price for `symbol`."""
    data = _get_json(TICKER_URL, {"symbol": symbol})
    try:
        return float(data.get("price") or 0)
    except (AttributeError, TypeError, ValueError) as e:
        raise DataFetchError(f"Unexpected ticker payload for {symbol}: {data!r}") from e


@dataclass(frozen=True)
class MarketInfo:
    symbol: str
    base: str
    quote: str
    status: str = ""
    precision: dict = field(default_factory=dict)
    limits: list = field(default_factory=list)


def fetch_exchange_info(symbol=DEFAULT_SYMBOL):
    """Symbol, base/quote assets, precision and filters for one trading pair."""
    data = _get_json(EXCHANGE_INFO_URL, {"symbol": symbol})
    try:
        info = next(s for s in data["symbols"] if s["symbol"] == symbol)
        return MarketInfo(
            symbol=info["symbol"],
            base=info["baseAsset"],
            quote=info["quoteAsset"],
            status=info.get("status", ""),
            precision={
                "base": info.get("baseAssetPrecision"),
                "quote": info.get("quoteAssetPrecision"),
            },
            limits=list(info.get("filters", [])),
        )
    except (KeyError, TypeError, StopIteration) as e:
        raise DataFetchError(f"Unexpected exchangeInfo payload for {symbol}: {data!r}") from e


# === CSV ===

def save_candles_csv(candles, path):
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        for c in candles:
            writer.writerow([c.timestamp, c.open, c.high, c.low, c.close, c.volume])
    return len(candles)


def load_candles_csv(path):
    """Load candles saved by save_candles_csv; unparseable rows are skipped."""
    candles = []
    with open(path, "r", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            try:
                candles.append(Candle.from_dict(row))
            except (TypeError, ValueError):
                logger.warning("Skipping unparseable row: %s", row)
                continue
    return candles
