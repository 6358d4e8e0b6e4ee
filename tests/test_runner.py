import json
from unittest.mock import patch

import pytest

from market_predictor import Candle
from market_predictor.market_data import MarketInfo, save_candles_csv
from market_predictor.runner import format_timestamp, main, parse_args, run


@pytest.fixture
def candles_csv(tmp_path):
    closes = [100.0, 101.0, 99.5, 102.0, 103.0, 102.5, 104.0]
    candles = [
        Candle(timestamp=1700000000000 + i * 14400000, open=c, high=c + 1, low=c - 1, close=c, volume=5.0)
        for i, c in enumerate(closes)
    ]
    candles.insert(3, Candle(timestamp=1, close=0.0))
    path = tmp_path / "candles.csv"
    save_candles_csv(candles, path)
    return path


def test_run_from_csv(candles_csv, tmp_path, capsys):
    state_path = tmp_path / "state.json"
    predictor = run(parse_args(["--csv", str(candles_csv), "--epochs", "10", "--state-out", str(state_path)]))

    # the zero-close candle is skipped
    assert len(predictor) == 7
    assert predictor.scaler.bound == 105.0

    out = capsys.readouterr().out
    assert "Predicted Price" in out
    assert "Final Loss" in out

    saved = json.loads(state_path.read_text())
    assert saved["maxScale"] == 105.0


def test_run_restores_state(candles_csv, tmp_path):
    state_path = tmp_path / "state.json"
    run(parse_args(["--csv", str(candles_csv), "--state-out", str(state_path)]))
    predictor = run(parse_args(["--csv", str(candles_csv), "--epochs", "1", "--state-in", str(state_path)]))
    assert predictor.get_state().max_scale == 105.0


def test_run_fetches_from_exchange(candles_csv, capsys):
    from market_predictor.market_data import load_candles_csv

    candles = load_candles_csv(candles_csv)
    info = MarketInfo(symbol="ETHUSDT", base="ETH", quote="USDT")
    with patch("market_predictor.market_data.fetch_candles", return_value=candles) as fetch, patch(
        "market_predictor.market_data.fetch_exchange_info", return_value=info
    ) as fetch_info:
        predictor = run(parse_args(["--symbol", "ETHUSDT", "--interval", "1d", "--limit", "8"]))
    fetch.assert_called_once_with("ETHUSDT", "1d", 8)
    fetch_info.assert_called_once_with("ETHUSDT")
    assert len(predictor) == 7

    out = capsys.readouterr().out
    assert "Base:   ETH" in out
    assert "Quote:  USDT" in out


def test_main_success(candles_csv):
    assert main(["--csv", str(candles_csv), "--backprop", "simple"]) == 0


@pytest.mark.parametrize("args", [["--epochs", "0"], ["--learning-rate", "2"]])
def test_main_rejects_invalid_config(candles_csv, args, capsys):
    assert main(["--csv", str(candles_csv)] + args) == 1
    assert "Invalid" in capsys.readouterr().err


def test_main_empty_data(tmp_path):
    path = tmp_path / "empty.csv"
    save_candles_csv([], path)
    assert main(["--csv", str(path)]) == 1


def test_main_missing_state_file(candles_csv, tmp_path):
    assert main(["--csv", str(candles_csv), "--state-in", str(tmp_path / "missing.json")]) == 1


def test_format_timestamp_out_of_range():
    assert format_timestamp(10**20) == f"{10**20} ms"
    assert format_timestamp(0) != "0 ms"


def test_main_with_out_of_range_timestamp(tmp_path, capsys):
    path = tmp_path / "candles.csv"
    save_candles_csv(
        [Candle(timestamp=10**20, open=c, high=c, low=c, close=c, volume=1.0) for c in (10.0, 11.0, 12.0)],
        path,
    )
    assert main(["--csv", str(path), "--epochs", "2"]) == 0
    assert f"{10**20} ms" in capsys.readouterr().out
