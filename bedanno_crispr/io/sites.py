"""
Loading off-target sites from a TSV table.
"""

from pathlib import Path
from typing import List
import logging

import pandas as pd

from ..core.models import GenomicSite, OffTargetRecord

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ('contig', 'position', 'strand', 'bases')


def load_off_target_sites(path: Path) -> List[OffTargetRecord]:
    """
    Load off-target sites from a TSV file.

    Required columns:
    - contig: Contig identifier
    - position: Position of the site on the contig
    - strand: '+' or '-'
    - bases: Target bases

    Optional columns:
    - context: Flanking sequence context
    - guide_id: Identifier for the guide
    - off_target_count: Number of off-targets found for the guide

    Args:
        path: Path to sites TSV

    Returns:
        List of OffTargetRecord objects, in file order
    """
    df = pd.read_csv(path, sep='\t', dtype=str)

    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Sites file {path} is missing columns: {', '.join(missing)}")

    records = []
    for idx, row in df.iterrows():
        strand = str(row['strand']).strip()
        if strand not in ('+', '-'):
            raise ValueError(f"Invalid strand '{strand}' in row {idx + 1} of {path}")

        context = row.get('context')
        guide_id = row.get('guide_id')
        ot_count = row.get('off_target_count')

        site = GenomicSite(
            contig=str(row['contig']),
            bases=str(row['bases']),
            forward_strand=(strand == '+'),
            position=int(row['position']),
            sequence_context=str(context) if pd.notna(context) else None,
        )
        records.append(OffTargetRecord(
            target=site,
            guide_id=str(guide_id) if pd.notna(guide_id) else None,
            off_target_count=int(ot_count) if pd.notna(ot_count) else None,
        ))

    logger.info(f"Loaded {len(records)} off-target sites from {path}")
    return records
