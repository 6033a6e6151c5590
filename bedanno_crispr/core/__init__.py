"""
Core data models and coordinate remapping.
"""

from .models import (
    BED_STOP_EXCLUSIVE,
    GenomicSite,
    NamedAnnotations,
    OffTargetRecord,
)
from .remap import (
    OLD_CONTIG_TAG,
    IntervalMappingTable,
    MappingInterval,
)

__all__ = [
    # Models
    'BED_STOP_EXCLUSIVE',
    'GenomicSite',
    'NamedAnnotations',
    'OffTargetRecord',
    # Remapping
    'OLD_CONTIG_TAG',
    'IntervalMappingTable',
    'MappingInterval',
]
