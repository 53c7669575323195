"""Command-line interface for bed2gff.

This module provides the entry point for the bed2gff CLI tool, built with
Click and Rich.

Example:
    $ bed2gff --help
    $ bed2gff -i transcripts.bed -I isoforms.tsv -o annotation.gff3
    $ bed2gff -i transcripts.bed.gz -o annotation.gff3.gz --source ensembl
"""

from pathlib import Path
from typing import Optional

import attrs
import click
from rich.console import Console

from bed2gff import __version__
from bed2gff.config import Config
from bed2gff.convert import LoggingObserver, convert_bed
from bed2gff.errors import FatalConversionError
from bed2gff.io.bed import read_isoforms
from bed2gff.utils.logging import setup_logging

# Initialize rich console for pretty output
console = Console()


@click.command()
@click.version_option(version=__version__, prog_name="bed2gff")
@click.option(
    "-i",
    "--input",
    "bed",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="BED12 file to convert (plain or gzipped).",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Output GFF3 file (gzipped if the name ends in .gz).",
)
@click.option(
    "-I",
    "--isoforms",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Tab-separated gene/isoform table. Without it each transcript is its own gene.",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="TOML configuration file.",
)
@click.option(
    "--source",
    type=str,
    help="Value of the GFF3 source column.  [default: bed2gff]",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write debug logging to this file.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output.")
@click.option("-q", "--quiet", is_flag=True, help="Suppress non-error output.")
def main(
    bed: Path,
    output: Path,
    isoforms: Optional[Path],
    config_path: Optional[Path],
    source: Optional[str],
    log_file: Optional[Path],
    verbose: bool,
    quiet: bool,
) -> None:
    """bed2gff: convert BED12 gene models into GFF3.

    Writes gene, transcript, exon, CDS, UTR and start/stop codon features
    for every transcript of the BED file. Transcripts are sorted by
    chromosome and start position.
    """
    try:
        config = Config.load(config_path)
        if source:
            config.output = attrs.evolve(config.output, source=source)
        if verbose:
            config.logging.verbosity = 2
        elif quiet:
            config.logging.verbosity = 0
        if log_file is not None:
            config.logging.log_file = log_file

        setup_logging(verbosity=config.logging.verbosity, log_file=config.logging.log_file)

        if not quiet:
            console.print("[bold blue]##### BED2GFF #####[/bold blue]")
            console.print(f"[blue]Input BED:[/blue] {bed}")
            if isoforms:
                console.print(f"[blue]Isoforms:[/blue] {isoforms}")
            console.print(f"[blue]Output:[/blue] {output}")

        isoform_map = read_isoforms(isoforms) if isoforms else None
        stats = convert_bed(
            bed,
            output,
            isoforms=isoform_map,
            config=config,
            observer=LoggingObserver(),
        )

        if not quiet:
            console.print("")
            console.print("[bold]Conversion Summary:[/bold]")
            console.print(f"  Transcripts:     {stats.n_records:,}")
            console.print(f"  Genes:           {stats.n_genes:,}")
            console.print(f"  Features:        {stats.n_features:,}")
            console.print(f"  Skipped lines:   {stats.n_skipped:,}")
            console.print("")
        console.print("[bold green]Success:[/bold green] BED file converted successfully!")

    except FatalConversionError as e:
        console.print(f"[bold red]Fail:[/bold red] BED file could not be converted. {e}")
        if verbose:
            import traceback
            traceback.print_exc()
        raise SystemExit(1)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        if verbose:
            import traceback
            traceback.print_exc()
        raise SystemExit(1)


if __name__ == "__main__":
    main()
