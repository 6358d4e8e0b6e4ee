import pytest

from market_predictor import BackpropMode, InvalidConfigError, PredictorConfig, validate_config
from market_predictor.errors import ErrorKind


def test_defaults():
    config = PredictorConfig()
    assert config.learning_rate == 0.1
    assert config.epochs == 60
    assert config.backprop_mode is BackpropMode.VERBOSE


def test_config_is_immutable():
    config = PredictorConfig()
    with pytest.raises(AttributeError):
        config.epochs = 5


def test_mode_parsed_from_string():
    assert PredictorConfig(backprop_mode="SIMPLE").backprop_mode is BackpropMode.SIMPLE


def test_unknown_mode_rejected():
    with pytest.raises(InvalidConfigError):
        PredictorConfig(backprop_mode="adam")


def test_from_dict_camel_case():
    config = PredictorConfig.from_dict({"learningRate": 0.05, "epochs": 10, "useSimpleBackprop": True})
    assert config == PredictorConfig(0.05, 10, BackpropMode.SIMPLE)


def test_from_dict_snake_case_round_trip():
    config = PredictorConfig(0.2, 30, BackpropMode.SIMPLE)
    assert PredictorConfig.from_dict(config.to_dict()) == config
    assert PredictorConfig.from_dict({"learning_rate": 0.2, "epochs": 30, "backprop_mode": "simple"}) == config


@pytest.mark.parametrize("lr", [1e-5, 0.5, 1])
@pytest.mark.parametrize("epochs", [1, 60, 10000])
def test_validate_accepts_ranges(lr, epochs):
    config = PredictorConfig(lr, epochs)
    assert validate_config(config) is config


@pytest.mark.parametrize("lr", [0, -0.1, 1.01, "0.1", True])
def test_validate_rejects_learning_rate(lr):
    with pytest.raises(InvalidConfigError) as exc:
        validate_config(PredictorConfig(learning_rate=lr))
    assert exc.value.kind is ErrorKind.INVALID_CONFIG


@pytest.mark.parametrize("epochs", [0, 10001, 2.5, -3])
def test_validate_rejects_epochs(epochs):
    with pytest.raises(InvalidConfigError):
        validate_config(PredictorConfig(epochs=epochs))
