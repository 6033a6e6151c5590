"""
Command-line interface for BEDANNO.

BEDANNO: BED annotation of CRISPR off-target sites
"""

import sys
from pathlib import Path

import click

from . import __version__
from .config import AnnotationConfig, ConfigurationError, Enzyme


@click.group()
@click.version_option(version=__version__)
def cli():
    """BEDANNO: BED annotation of CRISPR off-target sites."""
    pass


@cli.command()
@click.option('--sites', '-s', type=click.Path(exists=True), required=True,
              help='Off-target sites TSV (contig, position, strand, bases columns)')
@click.option('--bed', '-b', type=str,
              help='Comma-separated name:file pairs of BED files to annotate with')
@click.option('--remap', '-r', type=click.Path(exists=True),
              help='Interval file mapping renamed contigs back to the original genome')
@click.option('--config', '-c', 'config_path', type=click.Path(exists=True),
              help='YAML configuration file (command-line options take precedence)')
@click.option('--output', '-o', type=click.Path(), required=True,
              help='Output TSV')
@click.option('--enzyme', type=click.Choice([e.value for e in Enzyme], case_sensitive=False),
              help='Enzyme the guides were designed for (default: spCas9)')
@click.option('--index/--no-index', 'use_index', default=None,
              help='Query tabix-indexed BED files instead of streaming them')
def annotate(sites, bed, remap, config_path, output, enzyme, use_index):
    """
    Annotate off-target sites with overlapping BED features.

    \b
    Example:
      bedanno annotate -s sites.tsv -b exons:exons.bed,repeats:rmsk.bed -o annotated.tsv

    \b
    Example with contig remapping:
      bedanno annotate -s sites.tsv -b exons:exons.bed -r scaffolds.txt -o annotated.tsv
    """
    import logging

    from .io.output import write_annotated_tsv
    from .io.sites import load_off_target_sites
    from .scoring import get_score_model

    # Set up logging
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    logger = logging.getLogger(__name__)

    try:
        config = AnnotationConfig.from_yaml(Path(config_path)) if config_path else AnnotationConfig()
    except ConfigurationError as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)

    # Command-line values override the config file
    if bed:
        config.bed = bed
    if remap:
        config.remap = remap
    if enzyme:
        config.enzyme = Enzyme.from_string(enzyme)
    if use_index is not None:
        config.use_index = use_index

    if not config.bed and not config.remap:
        click.echo("Error: Either --bed or --remap (or a config file setting them) must be provided",
                   err=True)
        sys.exit(1)

    model = get_score_model(
        'BedAnnotator',
        input_bed=config.bed,
        genome_transform=config.remap,
        use_index=config.use_index,
    )
    try:
        model.configure()
    except ConfigurationError as e:
        click.echo(f"Error configuring {model.identity()}: {e}", err=True)
        sys.exit(1)

    pack = config.parameter_pack
    if not model.is_applicable_to_model(pack):
        click.echo(f"Error: {model.identity()} cannot be used with {pack.enzyme.value}", err=True)
        sys.exit(1)

    try:
        records = load_off_target_sites(Path(sites))
    except ValueError as e:
        click.echo(f"Error loading sites: {e}", err=True)
        sys.exit(1)

    scorable = [r for r in records if model.is_applicable_to_guide(pack, r)]
    if len(scorable) < len(records):
        logger.warning(f"{len(records) - len(scorable)} sites cannot be scored by "
                       f"{model.identity()} and were dropped")

    model.annotate(scorable)

    output_path = write_annotated_tsv(scorable, [model], Path(output))
    click.echo(f"Annotated {len(scorable)} sites")
    click.echo(f"Results written to: {output_path}")


@cli.command()
def models():
    """List the available score models."""
    from .scoring import available_score_models

    for name in available_score_models():
        click.echo(name)


@cli.command()
@click.option('--output', '-o', type=click.Path(), default='bedanno_config.yaml',
              help='Output config file path')
def init(output):
    """Generate a template configuration file."""
    template = """# BEDANNO Configuration

# BED files to annotate with, as name: path
bed:
  exons: exons.bed
  repeats: rmsk.bed.gz

# Optional: interval file mapping renamed contigs back to the original genome
# original_contig <TAB> offset_start <TAB> offset_stop <TAB> new_contig
# remap: scaffolds.txt

# Query tabix-indexed (bgzip + .tbi) BED files instead of streaming them
use_index: false

# Enzyme: spCas9 or Cpf1
enzyme: spCas9
"""

    with open(output, 'w') as f:
        f.write(template)

    click.echo(f"Generated configuration template: {output}")
    click.echo("\nEdit this file and run:")
    click.echo(f"  bedanno annotate --config {output} -s sites.tsv -o annotated.tsv")


if __name__ == '__main__':
    cli()
