"""
Configuration classes and parsing of annotation source specifications.

BEDANNO: BED annotation of CRISPR off-target sites
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional
import logging

import yaml

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when annotation inputs are missing or malformed."""


class EnzymeType(Enum):
    """Parent nuclease families."""
    CAS9 = "cas9"
    CPF1 = "cpf1"


class Enzyme(Enum):
    """Supported enzymes, keyed by their string encoding."""
    SPCAS9 = "spCas9"
    CPF1 = "Cpf1"

    @property
    def parent(self) -> EnzymeType:
        return EnzymeType.CAS9 if self is Enzyme.SPCAS9 else EnzymeType.CPF1

    @classmethod
    def from_string(cls, value: str) -> 'Enzyme':
        for enzyme in cls:
            if enzyme.value.lower() == value.strip().lower():
                return enzyme
        raise ConfigurationError(
            f"Unknown enzyme '{value}', expected one of: "
            f"{', '.join(e.value for e in cls)}"
        )


@dataclass
class ParameterPack:
    """Enzyme parameters handed to score models."""
    enzyme: Enzyme
    pam_pattern: str
    pam_position: str  # '3prime' or '5prime' relative to guide
    guide_length: int

    @classmethod
    def cas9(cls) -> 'ParameterPack':
        """SpCas9 parameters."""
        return cls(
            enzyme=Enzyme.SPCAS9,
            pam_pattern="NGG",
            pam_position="3prime",
            guide_length=20,
        )

    @classmethod
    def cpf1(cls) -> 'ParameterPack':
        """Cpf1 (Cas12a) parameters."""
        return cls(
            enzyme=Enzyme.CPF1,
            pam_pattern="TTTN",
            pam_position="5prime",
            guide_length=20,
        )

    @classmethod
    def for_enzyme(cls, enzyme: Enzyme) -> 'ParameterPack':
        return cls.cas9() if enzyme is Enzyme.SPCAS9 else cls.cpf1()


@dataclass
class AnnotationSourceSpec:
    """A named BED file used as an annotation source."""
    name: str
    path: Path


def parse_bed_specs(value: str) -> List[AnnotationSourceSpec]:
    """
    Parse a comma-separated list of name:file BED specifications.

    Args:
        value: String such as "exons:exons.bed,repeats:rmsk.bed"

    Returns:
        One AnnotationSourceSpec per pair, in the order given

    Raises:
        ConfigurationError: A pair lacks a name or file, the file does not
            exist, or a name is used twice

    Examples:
        >>> parse_bed_specs("")
        []
    """
    specs: List[AnnotationSourceSpec] = []
    if not value or not value.strip():
        return specs

    for pair in value.split(','):
        pair = pair.strip()
        name_and_file = pair.split(':')
        if len(name_and_file) != 2 or not name_and_file[0] or not name_and_file[1]:
            raise ConfigurationError(
                f"Bedfile argument '{pair}' doesn't contain both a name and a file"
            )

        name, filename = name_and_file
        path = Path(filename)
        if not path.exists():
            raise ConfigurationError(
                f"The input bed file doesn't exist for name/file pair: {pair}"
            )
        if any(spec.name == name for spec in specs):
            raise ConfigurationError(f"Annotation name '{name}' is used more than once")

        specs.append(AnnotationSourceSpec(name=name, path=path))

    return specs


@dataclass
class AnnotationConfig:
    """Full annotation run configuration."""
    bed: str = ""
    remap: Optional[str] = None
    use_index: bool = False
    enzyme: Enzyme = Enzyme.SPCAS9

    @property
    def parameter_pack(self) -> ParameterPack:
        return ParameterPack.for_enzyme(self.enzyme)

    @classmethod
    def from_yaml(cls, path: Path) -> 'AnnotationConfig':
        """
        Load configuration from a YAML file.

        The `bed` key accepts either the name:file string form or a mapping
        of names to files.
        """
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Could not parse YAML config {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"YAML config {path} must be a mapping of settings")

        bed = data.get('bed', '')
        if isinstance(bed, dict):
            bed = ','.join(f"{name}:{filename}" for name, filename in bed.items())

        config = cls(
            bed=bed,
            remap=data.get('remap') or None,
            use_index=bool(data.get('use_index', False)),
            enzyme=Enzyme.from_string(str(data.get('enzyme', 'spCas9'))),
        )
        logger.debug(f"Loaded annotation configuration from {path}: {config}")
        return config
