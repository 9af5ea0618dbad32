"""Binning of a secondary channel over ranges of a primary channel."""

from flow_binning.binning.aggregator import (
    bin_edges,
    binned_means,
    binned_means_arrays,
)
from flow_binning.binning.combine import (
    SUMMARY_COLUMNS,
    summaries_to_frame,
    combine_summaries,
    bin_samples,
    run,
)

__all__ = [
    "bin_edges",
    "binned_means",
    "binned_means_arrays",
    "SUMMARY_COLUMNS",
    "summaries_to_frame",
    "combine_summaries",
    "bin_samples",
    "run",
]
