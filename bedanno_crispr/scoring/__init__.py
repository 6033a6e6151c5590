"""
Score models: the plugin contract, the registry and the BED annotator.
"""

from .base import ScoreModel
from .registry import (
    available_score_models,
    get_score_model,
    register_score_model,
)
from .bed_annotation import BedAnnotator

__all__ = [
    'ScoreModel',
    'BedAnnotator',
    'available_score_models',
    'get_score_model',
    'register_score_model',
]
