"""
Remapping of guide coordinates from renamed/offset contigs back to the
original genome.

Guides are sometimes discovered against a reference whose contigs are
sub-regions of the real genome (e.g. scaffolds cut out of a chromosome).
A four-column interval file records where each of those contigs came from:

    original_contig <TAB> offset_start <TAB> offset_stop <TAB> new_contig
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional
import logging

from ..config import ConfigurationError
from .models import OffTargetRecord

logger = logging.getLogger(__name__)

OLD_CONTIG_TAG = "oldContig"


@dataclass(frozen=True)
class MappingInterval:
    """Where a renamed contig sits in the original genome."""
    original_contig: str
    offset_start: int
    offset_stop: int
    new_contig: str


class IntervalMappingTable:
    """Lookup from a renamed contig id to its original contig and offset."""

    def __init__(self, intervals: Optional[Dict[str, MappingInterval]] = None):
        self._intervals: Dict[str, MappingInterval] = dict(intervals or {})

    @classmethod
    def from_file(cls, path: Path) -> 'IntervalMappingTable':
        """
        Build the table from a tab-delimited four-column interval file.

        If the same new contig id appears twice the later line wins.

        Args:
            path: Path to the interval file (no header row)

        Returns:
            IntervalMappingTable

        Raises:
            ConfigurationError: A line does not have exactly four fields, or
                an offset is not an integer
        """
        table = cls()
        with open(path) as f:
            for line_number, line in enumerate(f, start=1):
                line = line.rstrip('\r\n')
                if not line.strip():
                    continue

                fields = line.split('\t')
                if len(fields) != 4:
                    raise ConfigurationError(
                        f"The interval file {path} didn't parse into a four part interval "
                        f"on line {line_number}, instead {len(fields)}"
                    )

                original_contig, start, stop, new_contig = fields
                try:
                    interval = MappingInterval(
                        original_contig=original_contig,
                        offset_start=int(start),
                        offset_stop=int(stop),
                        new_contig=new_contig,
                    )
                except ValueError:
                    raise ConfigurationError(
                        f"Non-integer offset in interval file {path} on line {line_number}: {line!r}"
                    ) from None

                table.add(interval)

        logger.info(f"Loaded {len(table)} contig mappings from {path}")
        return table

    def add(self, interval: MappingInterval) -> None:
        if interval.new_contig in self._intervals:
            logger.warning(
                f"Contig {interval.new_contig} is mapped more than once; "
                f"keeping the last mapping ({interval.original_contig}:{interval.offset_start})"
            )
        self._intervals[interval.new_contig] = interval

    def get(self, contig: str) -> Optional[MappingInterval]:
        return self._intervals.get(contig)

    def remap(self, record: OffTargetRecord) -> bool:
        """
        Move a record's target back to the original genome coordinates.

        The old contig id is appended to the record's annotations under
        OLD_CONTIG_TAG. Records on contigs absent from the table are left
        untouched.

        Returns:
            True if the record was remapped
        """
        old_contig = record.target.contig
        interval = self._intervals.get(old_contig)
        if interval is None:
            return False

        # discovery positions are 1-based relative to the renamed contig
        new_position = (record.target.position - 1) + interval.offset_start
        record.annotate(OLD_CONTIG_TAG, old_contig)
        record.target = record.target.relocated(interval.original_contig, new_position)
        return True

    def remap_all(self, records: Iterable[OffTargetRecord]) -> int:
        """Remap each record once. Returns the number of records moved."""
        return sum(1 for record in records if self.remap(record))

    def __contains__(self, contig: object) -> bool:
        return contig in self._intervals

    def __iter__(self) -> Iterator[MappingInterval]:
        return iter(self._intervals.values())

    def __len__(self) -> int:
        return len(self._intervals)
