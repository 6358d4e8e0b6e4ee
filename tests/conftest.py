"""Shared fixtures for market predictor tests."""

import pytest

from market_predictor import Candle, MarketPredictor, PredictorConfig


def pytest_collection_modifyitems(config, items):
    """Mark tests by file: test_runner is integration, everything else unit."""
    for item in items:
        if "test_runner" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


def make_candle(close, high=None, timestamp=0):
    high = close if high is None else high
    return Candle(timestamp=timestamp, open=close, high=high, low=close, close=close, volume=1.0)


@pytest.fixture
def candle_factory():
    return make_candle


@pytest.fixture
def config():
    return PredictorConfig(learning_rate=0.1, epochs=60, backprop_mode="verbose")


@pytest.fixture
def predictor(config):
    return MarketPredictor(config)


@pytest.fixture
def closes():
    return [100.0, 102.5, 101.0, 104.0, 103.5, 105.0, 107.5, 106.0]


@pytest.fixture
def loaded_predictor(predictor, closes):
    for i, close in enumerate(closes):
        predictor.add_data_point(make_candle(close, high=close + 1, timestamp=i * 3600000))
    return predictor
