"""Read a sample's two channels from an exported CSV table."""

import logging
from pathlib import Path

import pandas as pd

from flow_binning.models.sample import Sample

logger = logging.getLogger(__name__)


def load_sample(
    path: Path | str,
    primary_column: str,
    secondary_column: str,
    label: str | None = None,
) -> Sample:
    """Load the primary and secondary channel columns of a CSV file.

    Only the two named columns are kept. Non-numeric entries become NaN
    and are removed later by flow_binning.preprocessing.drop_invalid.

    Args:
        path: CSV file with a header row.
        primary_column: Header of the primary (binned) channel.
        secondary_column: Header of the secondary (averaged) channel.
        label: Sample label. Defaults to the file name without extension.

    Returns:
        Raw, uncleaned Sample.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If either column is missing from the header.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Sample file not found: {path}")

    header = pd.read_csv(path, nrows=0).columns
    missing = [c for c in (primary_column, secondary_column) if c not in header]
    if missing:
        raise ValueError(
            f"{path.name} is missing column(s) {', '.join(missing)}. "
            f"Available: {', '.join(map(str, header))}"
        )

    df = pd.read_csv(path, usecols=[primary_column, secondary_column])
    primary = pd.to_numeric(df[primary_column], errors="coerce").to_numpy(dtype=float)
    secondary = pd.to_numeric(df[secondary_column], errors="coerce").to_numpy(dtype=float)

    sample = Sample(
        label=label or path.stem,
        primary=primary,
        secondary=secondary,
        primary_channel=primary_column,
        secondary_channel=secondary_column,
    )
    logger.debug("Loaded %d cells from %s", len(sample), path)
    return sample
