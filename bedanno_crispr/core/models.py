"""
Data models for guide off-target sites and their annotations.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Optional, Tuple


# BED intervals are half-open: [start, stop)
BED_STOP_EXCLUSIVE = True


@dataclass(frozen=True)
class GenomicSite:
    """
    A guide target site in the genome.

    Attributes:
        contig: Contig (chromosome) identifier
        bases: Target bases, including the PAM
        forward_strand: True if the target is on the forward strand
        position: 0-based position of the site on the contig
        sequence_context: Optional flanking sequence around the site
    """
    contig: str
    bases: str
    forward_strand: bool
    position: int
    sequence_context: Optional[str] = None

    @property
    def strand(self) -> str:
        return '+' if self.forward_strand else '-'

    def overlaps(self, contig: str, start: int, stop: int) -> bool:
        """Check whether this site lies within a BED interval on `contig`."""
        if contig != self.contig:
            return False
        if BED_STOP_EXCLUSIVE:
            return start <= self.position < stop
        return start <= self.position <= stop

    def relocated(self, contig: str, position: int) -> 'GenomicSite':
        """Return a copy of this site moved to a new contig and position."""
        return replace(self, contig=contig, position=position)


@dataclass
class NamedAnnotations:
    """
    Ordered multimap from annotation name to the values collected for it.

    Values added under an existing name are appended, never overwritten.
    Names keep the order in which they were first added.
    """
    _values: Dict[str, List[str]] = field(default_factory=dict)

    def add(self, name: str, value: str) -> None:
        self._values.setdefault(name, []).append(value)

    def get(self, name: str) -> List[str]:
        """Values stored under `name`, or an empty list."""
        return list(self._values.get(name, []))

    def keys(self) -> List[str]:
        return list(self._values.keys())

    def items(self) -> List[Tuple[str, List[str]]]:
        return [(k, list(v)) for k, v in self._values.items()]

    def to_dict(self) -> Dict[str, List[str]]:
        return {k: list(v) for k, v in self._values.items()}

    def __getitem__(self, name: str) -> List[str]:
        return list(self._values[name])

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)


@dataclass
class OffTargetRecord:
    """
    A candidate guide and the annotations collected for it.

    Attributes:
        target: The genomic site of the guide
        annotations: Named annotations added by score models
        guide_id: Optional identifier carried through to output
        off_target_count: Number of off-targets found upstream, if known
    """
    target: GenomicSite
    annotations: NamedAnnotations = field(default_factory=NamedAnnotations)
    guide_id: Optional[str] = None
    off_target_count: Optional[int] = None

    def annotate(self, name: str, value: str) -> None:
        self.annotations.add(name, value)

    def __repr__(self) -> str:
        return (
            f"OffTargetRecord({self.target.contig}:{self.target.position}"
            f"{self.target.strand}, annotations={self.annotations.to_dict()})"
        )
