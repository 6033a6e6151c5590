"""
Output generation for annotated off-target sites.
"""

from pathlib import Path
from typing import Any, Dict, List, Sequence
import logging

import pandas as pd

from ..core.models import OffTargetRecord
from ..scoring.base import ScoreModel

logger = logging.getLogger(__name__)

SITE_COLUMNS = ['guide_id', 'contig', 'position', 'strand', 'bases', 'off_target_count']
MISSING_VALUE = 'NA'


def records_to_dataframe(
    records: Sequence[OffTargetRecord],
    models: Sequence[ScoreModel],
) -> pd.DataFrame:
    """
    Tabulate records, one row per record.

    Site columns come first, followed by each model's header columns in
    order. Multiple values under one annotation name are comma-joined.
    """
    annotation_columns: List[str] = []
    for model in models:
        annotation_columns.extend(model.header_columns())

    rows = []
    for record in records:
        row: Dict[str, Any] = {
            'guide_id': record.guide_id if record.guide_id is not None else MISSING_VALUE,
            'contig': record.target.contig,
            'position': record.target.position,
            'strand': record.target.strand,
            'bases': record.target.bases,
            'off_target_count': (
                record.off_target_count if record.off_target_count is not None else MISSING_VALUE
            ),
        }
        for column in annotation_columns:
            values = record.annotations.get(column)
            row[column] = ','.join(values) if values else MISSING_VALUE
        rows.append(row)

    return pd.DataFrame(rows, columns=SITE_COLUMNS + annotation_columns)


def write_annotated_tsv(
    records: Sequence[OffTargetRecord],
    models: Sequence[ScoreModel],
    output_path: Path,
) -> Path:
    """
    Write annotated records to a TSV file.

    Each model's description is written first as a '## name: description'
    comment line.

    Args:
        records: Annotated records
        models: Score models that annotated the records
        output_path: Path for output TSV

    Returns:
        Path to written file
    """
    df = records_to_dataframe(records, models)

    with open(output_path, 'w') as f:
        for model in models:
            f.write(f"## {model.identity()}: {model.description()}\n")
        df.to_csv(f, sep='\t', index=False)

    logger.info(f"Wrote {len(records)} annotated sites to {output_path}")

    return output_path
