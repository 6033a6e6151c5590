"""
BED file reading.

Entries are streamed one line at a time; a BED source is never loaded into
memory as a whole. Tabix-indexed (bgzip + .tbi) files can also be queried
by position through pysam.
"""

import gzip
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional
import logging

import pysam

logger = logging.getLogger(__name__)

SKIPPED_PREFIXES = ('#', 'track', 'browser')


@dataclass(frozen=True)
class BedEntry:
    """A single BED interval, half-open [start, stop)."""
    contig: str
    start: int
    stop: int
    name: str


def parse_bed_line(line: str) -> Optional[BedEntry]:
    """
    Parse one BED line into a BedEntry.

    Fields are split on tabs; lines without any tab are split on
    whitespace. Returns None for headers, blank lines and rows that do not
    carry at least contig, start, stop and name.
    """
    line = line.rstrip('\r\n')
    if not line.strip() or line.startswith(SKIPPED_PREFIXES):
        return None

    fields = line.split('\t') if '\t' in line else line.split()
    if len(fields) < 4:
        return None

    try:
        start = int(fields[1])
        stop = int(fields[2])
    except ValueError:
        return None

    return BedEntry(contig=fields[0], start=start, stop=stop, name=fields[3])


class BedSource:
    """A named, file-backed producer of BED entries."""

    def __init__(self, name: str, path: Path):
        self.name = name
        self.path = Path(path)

    @property
    def index_path(self) -> Optional[Path]:
        """The tabix index next to the file, if there is one."""
        if not str(self.path).endswith('.gz'):
            return None
        for suffix in ('.tbi', '.csi'):
            candidate = Path(str(self.path) + suffix)
            if candidate.exists():
                return candidate
        return None

    @property
    def is_indexed(self) -> bool:
        return self.index_path is not None

    def __iter__(self) -> Iterator[BedEntry]:
        open_func = gzip.open if str(self.path).endswith('.gz') else open
        skipped = 0

        with open_func(self.path, 'rt') as f:
            for line_number, line in enumerate(f, start=1):
                entry = parse_bed_line(line)
                if entry is None:
                    if line.strip() and not line.startswith(SKIPPED_PREFIXES):
                        logger.debug(f"Skipping unparseable line {line_number} of {self.path}")
                        skipped += 1
                    continue
                yield entry

        if skipped:
            logger.warning(f"Skipped {skipped} unparseable lines in {self.path}")

    def fetch(self, contig: str, position: int, tabix: pysam.TabixFile) -> List[BedEntry]:
        """
        Entries overlapping a single position, in file order.

        Args:
            contig: Contig to query
            position: 0-based position
            tabix: Open TabixFile for this source
        """
        if position < 0 or contig not in tabix.contigs:
            return []

        entries = []
        for row in tabix.fetch(contig, position, position + 1, parser=pysam.asTuple()):
            if len(row) < 4:
                continue
            entries.append(BedEntry(
                contig=row[0], start=int(row[1]), stop=int(row[2]), name=row[3],
            ))
        return entries

    def open_index(self) -> pysam.TabixFile:
        return pysam.TabixFile(str(self.path), index=str(self.index_path))

    def __repr__(self) -> str:
        return f"BedSource(name={self.name}, path={self.path})"
