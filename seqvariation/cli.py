"""
Command-line interface for seqvariation.

Author: Kevin R. Roy
"""

import logging
import sys
from pathlib import Path

import click
import yaml

from . import __version__
from .config import VariationConfig, parse_sequence_input

logger = logging.getLogger(__name__)


def _fail(message: str):
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option('--config', '-c', 'config_path', type=click.Path(exists=True),
              help='YAML configuration file')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, config_path, verbose):
    """seqvariation: unambiguous edit lists and reference switching."""
    try:
        config = VariationConfig.from_yaml(config_path) if config_path else VariationConfig()
    except (OSError, ValueError, yaml.YAMLError) as e:
        _fail(f"Could not load configuration: {e}")

    logging.basicConfig(
        level=logging.DEBUG if verbose else config.level,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    ctx.obj = config


@cli.command()
@click.argument('query')
@click.argument('reference')
@click.option('--cigar', type=str,
              help='CIGAR of QUERY against REFERENCE; without it both are gapped rows')
@click.option('--ref-start', type=int, default=0,
              help='0-based reference position of the first aligned base (with --cigar)')
@click.option('--tsv', is_flag=True, help='Print a tab-separated variation table')
@click.pass_obj
def call(config, query, reference, cigar, ref_start, tsv):
    """
    Print the haplotype of QUERY relative to REFERENCE.

    QUERY and REFERENCE are sequences or FASTA paths.

    \b
    Example with gapped rows:
      seqvar call ACTTGT AC--GT
    \b
    Example with a CIGAR:
      seqvar call ACTTGT ACGT --cigar 2M2I2M
    """
    from .core.alignment import PairwiseAlignment
    from .core.haplotype import Haplotype
    from .io.output import variations_to_frame, write_variations_tsv

    try:
        query_seq = parse_sequence_input(query, config.gap_symbol)
        ref_seq = parse_sequence_input(reference, config.gap_symbol)
        if cigar:
            alignment = PairwiseAlignment.from_cigar(query_seq, ref_seq, cigar, ref_start)
        else:
            alignment = PairwiseAlignment.from_gapped(query_seq, ref_seq, gap=config.gap_symbol)
        haplotype = Haplotype.from_alignment(
            alignment, discard_clipped_indels=config.discard_clipped_indels
        )
    except ValueError as e:
        _fail(str(e))

    if tsv:
        write_variations_tsv(variations_to_frame(haplotype), sys.stdout)
    else:
        click.echo(str(haplotype))


@cli.command()
@click.argument('reference')
@click.argument('edits', nargs=-1)
@click.pass_obj
def reconstruct(config, reference, edits):
    """
    Apply EDITS to REFERENCE and print the resulting sequence.

    \b
    Example:
      seqvar reconstruct ACGT C2T 3AA
    """
    from .core.haplotype import Haplotype
    from .core.variation import Variation

    try:
        ref_seq = parse_sequence_input(reference)
        alphabet = config.alphabet_for(ref_seq)
        variations = [Variation(ref_seq, e, alphabet) for e in edits]
        haplotype = Haplotype.from_variations(ref_seq, variations)
    except ValueError as e:
        _fail(str(e))

    click.echo(haplotype.reconstruct())


@cli.command()
@click.argument('edit')
@click.argument('old_reference')
@click.argument('new_reference')
@click.pass_obj
def translate(config, edit, old_reference, new_reference):
    """
    Re-express EDIT on a new reference.

    OLD_REFERENCE and NEW_REFERENCE are gapped rows of the two references
    aligned to each other; EDIT is written against the ungapped old reference.

    \b
    Example:
      seqvar translate C3T ACCGT A-CGT
    """
    from .core.alignment import PairwiseAlignment
    from .core.translate import TranslationStatus, translate as translate_variation
    from .core.variation import Variation

    try:
        alignment = PairwiseAlignment.from_gapped(
            parse_sequence_input(new_reference, config.gap_symbol),
            parse_sequence_input(old_reference, config.gap_symbol),
            gap=config.gap_symbol,
        )
        variation = Variation(alignment.reference, edit, config.alphabet_for(alignment.reference))
        result = translate_variation(variation, alignment)
    except ValueError as e:
        _fail(str(e))

    if result.status == TranslationStatus.TRANSLATED:
        click.echo(str(result.variation))
    else:
        click.echo(f"{result.status.value}: {result.reason}")


@cli.command()
@click.argument('bam', type=click.Path(exists=True))
@click.argument('fasta', type=click.Path(exists=True))
@click.option('--contig', type=str, help='Only reads on this contig (needs a BAM index)')
@click.option('--max-reads', type=int, default=None, help='Stop after this many reads')
@click.option('--tsv', is_flag=True, help='Print a tab-separated variation table')
@click.pass_obj
def bam(config, bam, fasta, contig, max_reads, tsv):
    """
    Print the haplotype of every primary mapped read in BAM.

    FASTA is the indexed reference the reads were aligned to.
    """
    import pysam

    from .core.alignment import PairwiseAlignment
    from .core.haplotype import Haplotype
    from .io.output import haplotypes_to_frame, write_variations_tsv

    names = []
    haplotypes = []
    contigs = {}
    mode = 'r' if Path(bam).suffix == '.sam' else 'rb'

    try:
        with pysam.FastaFile(fasta) as ref_fasta, pysam.AlignmentFile(bam, mode) as bam_file:
            reads = bam_file.fetch(contig) if contig else bam_file
            for read in reads:
                if read.is_unmapped or read.is_secondary or read.is_supplementary:
                    continue
                name = read.reference_name
                # One shared string per contig
                if name not in contigs:
                    contigs[name] = ref_fasta.fetch(name)
                alignment = PairwiseAlignment.from_aligned_segment(read, contigs[name])
                haplotype = Haplotype.from_alignment(
                    alignment, discard_clipped_indels=config.discard_clipped_indels
                )
                names.append(read.query_name)
                haplotypes.append(haplotype)
                if max_reads is not None and len(haplotypes) >= max_reads:
                    break
    except (OSError, ValueError) as e:
        _fail(str(e))

    logger.info(f"Processed {len(haplotypes)} reads")

    if tsv:
        write_variations_tsv(haplotypes_to_frame(haplotypes, names), sys.stdout)
    else:
        for name, haplotype in zip(names, haplotypes):
            click.echo(f"{name}\t{haplotype}")


def main():
    cli()


if __name__ == '__main__':
    main()
