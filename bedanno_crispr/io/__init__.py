"""
I/O modules for BEDANNO.
"""

from .bed import (
    BedEntry,
    BedSource,
    parse_bed_line,
)
from .output import (
    records_to_dataframe,
    write_annotated_tsv,
)
from .sites import (
    load_off_target_sites,
)

__all__ = [
    'BedEntry',
    'BedSource',
    'parse_bed_line',
    'load_off_target_sites',
    'records_to_dataframe',
    'write_annotated_tsv',
]
