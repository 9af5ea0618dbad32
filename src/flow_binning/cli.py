"""Command-line interface for Flow Binning.

This CLI bins one fluorescence channel against another for one or more
exported sample tables and prints the combined summary.
"""

import io
import json
import math
import sys
from pathlib import Path

import click
import pandas as pd
from rich.console import Console
from rich.table import Table

from flow_binning import __version__
from flow_binning.observability import setup_logging


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    help="Also write a debug log to this file",
)
@click.option("--plain-logs", is_flag=True, help="Disable rich log formatting")
def cli(verbose, log_file, plain_logs):
    """Flow Binning - Binned means of one fluorescence channel against another.

    Cells are grouped into fixed-width bins of the primary channel and the
    secondary channel is summarized per bin:

    \b
    - Bins are half-open intervals (b, b + width] starting at 0
    - Each bin reports cell count, mean and standard error
    - Empty bins are omitted
    - Bins are labeled by their upper edge

    Use the --help flag on any command for more details.
    """
    setup_logging(
        verbose=verbose,
        log_file=Path(log_file) if log_file else None,
        use_rich=not plain_logs,
    )


def _output_options(func):
    func = click.option(
        "--output",
        "-o",
        type=click.Path(dir_okay=False),
        help="Write results to this file instead of stdout",
    )(func)
    func = click.option(
        "--format",
        "output_format",
        type=click.Choice(["table", "json", "csv"]),
        default="table",
        help="Output format (default: table)",
    )(func)
    return func


@cli.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False),
)
@click.option("--primary", "-x", required=True, help="Primary (binned) channel column")
@click.option("--secondary", "-y", required=True, help="Secondary (averaged) channel column")
@click.option(
    "--bin-width",
    "-w",
    type=float,
    default=0.1,
    help="Bin width, in log units unless --no-log (default: 0.1)",
)
@click.option(
    "--label",
    "-l",
    "labels",
    multiple=True,
    help="Sample label, once per file in order (default: file name)",
)
@click.option("--log-base", type=float, default=10.0, help="Log base (default: 10)")
@click.option("--no-log", is_flag=True, help="Bin linear intensities")
@_output_options
def summarize(files, primary, secondary, bin_width, labels, log_base, no_log, output_format, output):
    """Bin SECONDARY against PRIMARY for each sample file.

    Example:
        flow-binning summarize ctrl.csv treated.csv -x FITC-A -y PE-A

        flow-binning summarize ctrl.csv -x FITC-A -y PE-A -w 0.05 --format csv
    """
    from flow_binning.binning.combine import bin_samples
    from flow_binning.loader import load_sample

    if labels and len(labels) != len(files):
        click.echo(
            f"Error: got {len(labels)} labels for {len(files)} files",
            err=True,
        )
        sys.exit(1)

    try:
        samples = [
            load_sample(path, primary, secondary, label=labels[i] if labels else None)
            for i, path in enumerate(files)
        ]
        df = bin_samples(samples, bin_width, log_base=None if no_log else log_base)
    except (ValueError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    title = f"Mean {secondary} per {primary} bin"
    sample_labels = [s.label for s in samples]
    _emit(_format_results(df, output_format, title, sample_labels), output)


@cli.command()
@click.argument("config_path", type=click.Path(exists=True, dir_okay=False))
@_output_options
def run(config_path, output_format, output):
    """Bin every sample listed in a YAML config.

    Example:
        flow-binning run binning.yaml --format json -o summary.json
    """
    from flow_binning.binning.combine import run as run_config
    from flow_binning.config import BinningConfig

    try:
        config = BinningConfig.load(config_path)
        df = run_config(config)
    except (ValueError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    title = config.description or (
        f"Mean {config.secondary_column} per {config.primary_column} bin"
    )
    sample_labels = [s.resolved_label for s in config.samples]
    _emit(_format_results(df, output_format, title, sample_labels), output)


@cli.command("init-config")
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init_config(path, force):
    """Write a template YAML config to PATH."""
    from flow_binning.config import template_config

    if Path(path).exists() and not force:
        click.echo(f"Error: {path} already exists (use --force)", err=True)
        sys.exit(1)

    template_config().save(path)
    click.echo(f"Config template written to {path}")


def _emit(text: str, output: str | None) -> None:
    if output:
        Path(output).write_text(text)
        click.echo(f"Results written to {output}")
    else:
        click.echo(text)


def _json_records(df: pd.DataFrame) -> list[dict]:
    """DataFrame rows as JSON-safe dicts (NaN becomes None)."""
    records = []
    for row in df.to_dict(orient="records"):
        records.append({
            k: None if isinstance(v, float) and math.isnan(v) else v
            for k, v in row.items()
        })
    return records


def _format_results(
    df: pd.DataFrame,
    output_format: str,
    title: str,
    sample_labels: list[str],
) -> str:
    """Render a combined summary frame in the requested format.

    sample_labels lists every input sample, including ones with no bins.
    """
    if output_format == "json":
        result = {
            "title": title,
            "samples": sample_labels,
            "bins": _json_records(df),
        }
        return json.dumps(result, indent=2)
    if output_format == "csv":
        return df.to_csv(index=False).rstrip("\n")
    return _format_table(df, title)


def _format_table(df: pd.DataFrame, title: str) -> str:
    """Format summary rows as a rich table."""
    console = Console(record=True, file=io.StringIO(), width=100)
    table = Table(title=title)

    table.add_column("Sample", style="bold")
    table.add_column("Bin edge", justify="right")
    table.add_column("Cells", justify="right")
    table.add_column("Mean", justify="right")
    table.add_column("SE", justify="right")

    for row in df.to_dict(orient="records"):
        se = row["standard_error"]
        table.add_row(
            str(row["sample"]),
            f"{row['bin_edge']:.3f}",
            str(row["count"]),
            f"{row['mean']:.4f}",
            "-" if math.isnan(se) else f"{se:.4f}",
        )

    console.print(table)
    output = console.export_text()

    if df.empty:
        output += "\nNo populated bins.\n"

    return output


if __name__ == "__main__":
    cli()
