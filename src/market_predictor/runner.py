#!/usr/bin/env python3
"""
Fetch candles, train on the latest three closes and predict the next one.

    python -m market_predictor --symbol BTCUSDT --interval 4h --limit 100
"""

import argparse
import logging
import sys
from datetime import datetime

from . import market_data, persistence
from .config import EPOCHS, LEARNING_RATE, BackpropMode, PredictorConfig, validate_config
from .errors import DataFetchError, PredictorError
from .predictor import MarketPredictor

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Neural market predictor")
    parser.add_argument("--symbol", default=market_data.DEFAULT_SYMBOL)
    parser.add_argument("--interval", default="4h")
    parser.add_argument("--limit", type=int, default=100)
    parser.add_argument("--epochs", type=int, default=EPOCHS)
    parser.add_argument("--learning-rate", type=float, default=LEARNING_RATE)
    parser.add_argument(
        "--backprop", choices=[m.value for m in BackpropMode], default=BackpropMode.VERBOSE.value
    )
    parser.add_argument("--csv", help="read candles from a CSV file instead of Binance")
    parser.add_argument("--state-in", help="load network state from JSON before training")
    parser.add_argument("--state-out", help="save network state to JSON after predicting")
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args(argv)


def format_timestamp(timestamp_ms):
    """Millisecond epoch as local time; out-of-range values are shown raw."""
    try:
        return str(datetime.fromtimestamp(timestamp_ms / 1000))
    except (ValueError, OverflowError, OSError):
        return f"{timestamp_ms} ms"


def load_candles(args):
    if args.csv:
        return market_data.load_candles_csv(args.csv)
    return market_data.fetch_candles(args.symbol, args.interval, args.limit)


def run(args):
    config = validate_config(
        PredictorConfig(
            learning_rate=args.learning_rate,
            epochs=args.epochs,
            backprop_mode=args.backprop,
        )
    )
    predictor = MarketPredictor(config)

    if args.state_in:
        predictor.set_state(persistence.load_state(args.state_in)).unwrap()

    print("=" * 60)
    print("Neural Market Predictor")
    print("=" * 60)

    if not args.csv:
        info = market_data.fetch_exchange_info(args.symbol)
        print("\nMarket Info:")
        print(f"  Symbol: {info.symbol}")
        print(f"  Base:   {info.base}")
        print(f"  Quote:  {info.quote}")

    candles = load_candles(args)
    if not candles:
        raise DataFetchError("No market data received")

    print(f"\nFetched {len(candles)} data points")
    print(f"Latest price: {candles[-1].close}")
    print(
        f"Time range: {format_timestamp(candles[0].timestamp)}"
        f" to {format_timestamp(candles[-1].timestamp)}"
    )

    for candle in candles:
        if not market_data.is_valid_candle(candle):
            logger.warning("Skipping invalid data point: %s", candle)
            continue
        predictor.add_data_point(candle)

    stats = predictor.stats()
    print("\nMarket Statistics:")
    print(f"  Data Points: {stats.count}")
    print(f"  Max Price:   {stats.max_price}")
    print(f"  Min Price:   {stats.min_price}")
    print(f"  Avg Price:   {stats.mean_price:.2f}")

    print(f"\nTraining ({config.epochs} epochs, lr={config.learning_rate}, {config.backprop_mode.value})...")
    loss_curve = predictor.train().unwrap()
    if loss_curve:
        print(f"  Final Loss: {loss_curve[-1].loss:.6f}")
    else:
        print("  Training skipped: insufficient data")

    prediction = predictor.predict().unwrap()
    print(f"\n{'=' * 40}")
    print("PREDICTION")
    print("=" * 40)
    if prediction:
        print(f"Predicted Price: {prediction.predicted:.2f}")
        print(f"Actual Price:    {prediction.actual}")
        print(f"Loss:            {prediction.loss:.2f}")
        print(f"Confidence:      {prediction.confidence:.1%}")
    else:
        print("Prediction skipped: insufficient data")

    state = predictor.get_state()
    print("\nNetwork State:")
    print(f"  Max Scale: {state.max_scale}")
    print(f"  Weights 1: {state.weights1}")
    print(f"  Weights 2: {state.weights2}")

    if args.state_out:
        persistence.save_state(state, args.state_out)
        print(f"\nSaved state to {args.state_out}")

    return predictor


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        run(args)
    except (PredictorError, OSError) as e:
        logger.error("Predictor run failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
