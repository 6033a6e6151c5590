"""
Lookup of score models by name.
"""

from typing import Dict, List, Type

from ..config import ConfigurationError
from .base import ScoreModel

_SCORE_MODELS: Dict[str, Type[ScoreModel]] = {}


def register_score_model(cls: Type[ScoreModel]) -> Type[ScoreModel]:
    """Class decorator registering a score model under its `name`."""
    name = cls.name
    if not name:
        raise ValueError(f"Score model {cls.__name__} has no name")
    if name in _SCORE_MODELS and _SCORE_MODELS[name] is not cls:
        raise ValueError(f"Score model name '{name}' is already registered")
    _SCORE_MODELS[name] = cls
    return cls


def available_score_models() -> List[str]:
    return sorted(_SCORE_MODELS)


def get_score_model(name: str, **options) -> ScoreModel:
    """
    Create an (unconfigured) score model by name.

    Args:
        name: The model's identity()
        **options: Passed to the model constructor

    Raises:
        ConfigurationError: No model is registered under `name`
    """
    try:
        cls = _SCORE_MODELS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown score model '{name}', available: {', '.join(available_score_models())}"
        ) from None
    return cls(**options)
