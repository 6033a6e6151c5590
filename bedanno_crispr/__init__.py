"""
BEDANNO - BED annotation of CRISPR off-target sites.
"""

__version__ = "0.1.0"

from .config import (
    AnnotationConfig,
    ConfigurationError,
    Enzyme,
    ParameterPack,
)
from .core.models import GenomicSite, NamedAnnotations, OffTargetRecord
from .core.remap import IntervalMappingTable
from .scoring import BedAnnotator, ScoreModel, get_score_model

__all__ = [
    "AnnotationConfig",
    "ConfigurationError",
    "Enzyme",
    "ParameterPack",
    "GenomicSite",
    "NamedAnnotations",
    "OffTargetRecord",
    "IntervalMappingTable",
    "ScoreModel",
    "BedAnnotator",
    "get_score_model",
    "__version__",
]
