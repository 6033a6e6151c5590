"""
Annotation of guides with the BED features they overlap.

Each configured BED file is given a name; every guide whose target lies in
an interval of that file gets the interval's name appended under that key.
Guides can first be remapped from renamed/offset contigs back to the
original genome (see core.remap).
"""

from collections import defaultdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence
import logging

from ..config import ParameterPack, parse_bed_specs
from ..core.models import OffTargetRecord
from ..core.remap import OLD_CONTIG_TAG, IntervalMappingTable
from ..io.bed import BedSource
from .base import ScoreModel
from .registry import register_score_model

logger = logging.getLogger(__name__)


@register_score_model
class BedAnnotator(ScoreModel):
    """
    Score model that tags each guide with overlapping BED annotations.

    Args:
        input_bed: Comma-separated name:file pairs, e.g. "exons:exons.bed"
        genome_transform: Optional interval file for remapping contigs
        use_index: Query tabix-indexed BED files instead of streaming them
    """

    name = "BedAnnotator"

    def __init__(self, input_bed: str = "", genome_transform: Optional[str] = None,
                 use_index: bool = False):
        self.input_bed = input_bed
        self.genome_transform = genome_transform
        self.use_index = use_index

        self.sources: List[BedSource] = []
        self.mapping: Optional[IntervalMappingTable] = None
        self._configured = False

    @property
    def is_remapping(self) -> bool:
        return self.mapping is not None

    @property
    def bed_names(self) -> List[str]:
        return [source.name for source in self.sources]

    def description(self) -> str:
        paths = ','.join(str(source.path.absolute()) for source in self.sources)
        return f"Annotated with overlaps to bed file {paths}"

    def is_applicable_to_model(self, pack: ParameterPack) -> bool:
        return True

    def is_applicable_to_guide(self, pack: ParameterPack, record: OffTargetRecord) -> bool:
        return True

    def configure(self) -> None:
        specs = parse_bed_specs(self.input_bed)
        self.sources = [BedSource(spec.name, spec.path) for spec in specs]

        if self.genome_transform:
            self.mapping = IntervalMappingTable.from_file(Path(self.genome_transform))
        else:
            self.mapping = None

        self._configured = True
        logger.info(
            f"Configured {self.identity()} with {len(self.sources)} BED sources"
            f"{' and contig remapping' if self.is_remapping else ''}"
        )

    def annotate(self, records: Sequence[OffTargetRecord], encoding: Optional[Any] = None) -> None:
        if not self._configured:
            raise RuntimeError(f"{self.identity()} must be configured before annotating")

        # remap first so overlaps are tested in original genome coordinates
        if self.mapping is not None:
            moved = self.mapping.remap_all(records)
            logger.debug(f"Remapped {moved} of {len(records)} guides to original contigs")

        for source in self.sources:
            if self.use_index and source.is_indexed:
                self._annotate_indexed(source, records)
            else:
                self._annotate_streaming(source, records)

    def _annotate_streaming(self, source: BedSource, records: Sequence[OffTargetRecord]) -> None:
        by_contig: Dict[str, List[OffTargetRecord]] = defaultdict(list)
        for record in records:
            by_contig[record.target.contig].append(record)

        hits = 0
        for entry in source:
            for record in by_contig.get(entry.contig, ()):
                if record.target.overlaps(entry.contig, entry.start, entry.stop):
                    record.annotate(source.name, entry.name)
                    hits += 1

        logger.debug(f"{source.name}: {hits} overlaps from {source.path}")

    def _annotate_indexed(self, source: BedSource, records: Sequence[OffTargetRecord]) -> None:
        hits = 0
        with source.open_index() as tabix:
            for record in records:
                target = record.target
                for entry in source.fetch(target.contig, target.position, tabix):
                    if target.overlaps(entry.contig, entry.start, entry.stop):
                        record.annotate(source.name, entry.name)
                        hits += 1

        logger.debug(f"{source.name}: {hits} overlaps from indexed {source.path}")

    def header_columns(self) -> List[str]:
        if self.is_remapping:
            return self.bed_names + [OLD_CONTIG_TAG]
        return self.bed_names
