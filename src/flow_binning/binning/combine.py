"""Assemble per-sample bin summaries into one labeled table."""

import logging
from typing import Iterable, Mapping

import pandas as pd

from flow_binning.binning.aggregator import binned_means
from flow_binning.config import BinningConfig
from flow_binning.loader import load_sample
from flow_binning.models.sample import Sample
from flow_binning.models.summary import BinSummary
from flow_binning.preprocessing import prepare_sample

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = ["bin_edge", "count", "mean", "standard_error", "sample"]


def summaries_to_frame(summaries: list[BinSummary], label: str) -> pd.DataFrame:
    """Convert one sample's summaries to a DataFrame tagged with its label."""
    df = pd.DataFrame(
        {
            "bin_edge": [s.bin_edge for s in summaries],
            "count": [s.count for s in summaries],
            "mean": [s.mean for s in summaries],
            "standard_error": [s.standard_error for s in summaries],
        }
    )
    df = df.astype({"bin_edge": float, "count": int, "mean": float, "standard_error": float})
    df["sample"] = label
    return df[SUMMARY_COLUMNS]


def combine_summaries(summaries_by_label: Mapping[str, list[BinSummary]]) -> pd.DataFrame:
    """Concatenate summaries of several samples, in mapping order.

    Returns:
        DataFrame with columns bin_edge, count, mean, standard_error, sample.
        Rows of each sample keep ascending bin_edge order.
    """
    frames = [
        summaries_to_frame(summaries, label)
        for label, summaries in summaries_by_label.items()
    ]
    if not frames:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    return pd.concat(frames, ignore_index=True)


def bin_samples(
    samples: Iterable[Sample],
    bin_width: float,
    log_base: float | None = 10.0,
) -> pd.DataFrame:
    """Clean, transform and bin each sample, then combine the results.

    Args:
        samples: Raw samples with distinct labels.
        bin_width: Bin width, in log units when log_base is set.
        log_base: Logarithm base for the transform, or None for linear.

    Returns:
        Combined summary DataFrame (see combine_summaries).

    Raises:
        ValueError: If two samples share a label.
    """
    summaries_by_label: dict[str, list[BinSummary]] = {}
    for sample in samples:
        if sample.label in summaries_by_label:
            raise ValueError(f"Duplicate sample label: {sample.label}")
        prepared = prepare_sample(sample, log_base=log_base)
        summaries_by_label[sample.label] = binned_means(prepared, bin_width)

    return combine_summaries(summaries_by_label)


def run(config: BinningConfig) -> pd.DataFrame:
    """Load every sample named in a config and bin them."""
    config.validate()
    logger.info(
        "Binning %d samples: %s vs %s, width=%s, log_base=%s",
        len(config.samples),
        config.secondary_column,
        config.primary_column,
        config.bin_width,
        config.log_base,
    )

    samples = [
        load_sample(
            source.path,
            config.primary_column,
            config.secondary_column,
            label=source.resolved_label,
        )
        for source in config.samples
    ]
    return bin_samples(samples, config.bin_width, log_base=config.log_base)
