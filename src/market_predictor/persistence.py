"""
JSON save/load for network state

File format:
    {"weights1": [[w00, w01], [w10, w11]], "weights2": [[v0, v1]], "maxScale": bound}
"""

import json
import logging

from .errors import InvalidStateError
from .network import NetworkState, W1_SHAPE, W2_SHAPE, as_matrix

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("weights1", "weights2", "maxScale")


def state_to_dict(state):
    return {
        "weights1": [list(row) for row in state.weights1],
        "weights2": [list(row) for row in state.weights2],
        "maxScale": state.max_scale,
    }


def state_from_dict(data):
    if not isinstance(data, dict):
        raise InvalidStateError(f"Invalid network state: expected an object, got {type(data).__name__}")

    missing = [k for k in REQUIRED_KEYS if data.get(k) is None]
    if missing:
        raise InvalidStateError(f"Invalid network state: missing {', '.join(missing)}")

    max_scale = data["maxScale"]
    if isinstance(max_scale, bool):
        raise InvalidStateError("Invalid network state: maxScale must be a number")
    try:
        max_scale = float(max_scale)
    except (TypeError, ValueError) as e:
        raise InvalidStateError(f"Invalid network state: maxScale {max_scale!r} is not a number") from e

    # Shape is checked again by NetCore.import_state; failing here gives the file-level message
    weights1 = as_matrix(data["weights1"], W1_SHAPE, "weights1").tolist()
    weights2 = as_matrix(data["weights2"], W2_SHAPE, "weights2").tolist()
    return NetworkState(weights1=weights1, weights2=weights2, max_scale=max_scale)


def save_state(state, path):
    with open(path, "w") as f:
        json.dump(state_to_dict(state), f, indent=2)
    logger.info("Saved network state to %s", path)


def load_state(path):
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidStateError(f"Invalid network state file {path}: {e}") from e
    return state_from_dict(data)
