"""
The contract shared by all annotation and scoring plugins.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from ..config import ParameterPack
from ..core.models import OffTargetRecord


class ScoreModel(ABC):
    """
    Base class for plugins that score or annotate guides.

    A host configures a model once, checks that it applies to the enzyme
    and to each guide, then calls annotate() on batches of records.
    """

    # name used to look the model up when initialising scoring
    name: str = ""

    def identity(self) -> str:
        return type(self).name

    @abstractmethod
    def description(self) -> str:
        """Description of the method for the header of the output file."""

    @abstractmethod
    def is_applicable_to_model(self, pack: ParameterPack) -> bool:
        """Whether this model is valid for the enzyme described by `pack`."""

    @abstractmethod
    def is_applicable_to_guide(self, pack: ParameterPack, record: OffTargetRecord) -> bool:
        """
        Whether a guide can be scored.

        On-target scores, for instance, need flanking sequence context on each
        side and cannot score a guide without it.
        """

    @abstractmethod
    def configure(self) -> None:
        """One-time setup. Raises ConfigurationError on bad inputs."""

    @abstractmethod
    def annotate(self, records: Sequence[OffTargetRecord], encoding: Optional[Any] = None) -> None:
        """Score or annotate `records` in place."""

    @abstractmethod
    def header_columns(self) -> List[str]:
        """Output columns this model adds, in order."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.identity()})"
