from typing import Optional

from .conditions import Condition, GraphCondition, IntervalCondition, NeuralCondition
from .predictions import Prediction, LinearPrediction


_CONDITIONS: dict[str, type[Condition]] = {}
_CONDITION_PREFERRED_NAMES: dict[type[Condition], str] = {}

_PREDICTIONS: dict[str, type[Prediction]] = {}
_PREDICTION_PREFERRED_NAMES: dict[type[Prediction], str] = {}


def register_condition(condition_type: type[Condition], *names: str) -> None:
    assert issubclass(condition_type, Condition)
    assert names
    for name in names:
        assert name and isinstance(name, str)
        assert name not in _CONDITIONS
        _CONDITIONS[name] = condition_type
        if condition_type not in _CONDITION_PREFERRED_NAMES:
            _CONDITION_PREFERRED_NAMES[condition_type] = name


def get_condition(name: str) -> Optional[type[Condition]]:
    assert name and isinstance(name, str)
    return _CONDITIONS.get(name.lower(), None)


def list_conditions() -> list[str]:
    return list(_CONDITION_PREFERRED_NAMES.values())


def register_prediction(prediction_type: type[Prediction], *names: str) -> None:
    assert issubclass(prediction_type, Prediction)
    assert names
    for name in names:
        assert name and isinstance(name, str)
        assert name not in _PREDICTIONS
        _PREDICTIONS[name] = prediction_type
        if prediction_type not in _PREDICTION_PREFERRED_NAMES:
            _PREDICTION_PREFERRED_NAMES[prediction_type] = name


def get_prediction(name: str) -> Optional[type[Prediction]]:
    assert name and isinstance(name, str)
    return _PREDICTIONS.get(name.lower(), None)


def list_predictions() -> list[str]:
    return list(_PREDICTION_PREFERRED_NAMES.values())


register_condition(IntervalCondition, 'interval', 'rectangle', 'hyperrectangle')
register_condition(GraphCondition, 'graph', 'dgp')
register_condition(NeuralCondition, 'neural', 'mlp')

register_prediction(LinearPrediction, 'linear', 'nlms')
