"""Binned means of a secondary channel over ranges of a primary channel.

Primary values are partitioned into half-open intervals (b, b + width]
starting at 0. For each interval the secondary values of the cells that
fall in it are summarized by count, mean and standard error. Empty
intervals are dropped, so the output only describes populated bins.

Example:
    >>> import numpy as np
    >>> summaries = binned_means_arrays(
    ...     np.array([0.1, 0.2, 0.6, 0.6]),
    ...     np.array([1.0, 3.0, 5.0, 7.0]),
    ...     bin_width=0.5,
    ... )
    >>> [(s.bin_edge, s.count, s.mean) for s in summaries]
    [(0.5, 2, 2.0), (1.0, 2, 6.0)]
"""

import logging
import math

import numpy as np
from scipy import stats

from flow_binning.models.sample import Sample
from flow_binning.models.summary import BinSummary

logger = logging.getLogger(__name__)


def _width_decimals(bin_width: float) -> int | None:
    """Decimal places in the shortest repr of bin_width, or None if too many."""
    fraction = np.format_float_positional(bin_width, trim="-").partition(".")[2]
    return len(fraction) if len(fraction) <= 15 else None


def bin_edges(max_primary: float, bin_width: float) -> np.ndarray:
    """Generate bin edges 0, w, 2w, ... up to the first edge >= max_primary.

    Edges are rounded to the decimal places of bin_width, so a width of
    0.1 gives edges 0.3 and 0.7 rather than 0.30000000000000004 and
    0.7000000000000001. A maximum that lands exactly on an edge closes
    the last bin; no trailing bin is opened past it.

    Args:
        max_primary: Largest primary value to cover.
        bin_width: Width of each bin (must be positive).

    Returns:
        Array of n_bins + 1 edges. Bin i covers (edges[i], edges[i + 1]].

    Raises:
        ValueError: If bin_width is not positive.
    """
    if not bin_width > 0:
        raise ValueError(f"Bin width must be positive. Got {bin_width}")

    decimals = _width_decimals(bin_width)

    def _edges(n: int) -> np.ndarray:
        edges = np.arange(n + 1, dtype=np.float64) * bin_width
        return edges if decimals is None else np.round(edges, decimals)

    n_bins = max(int(np.ceil(max_primary / bin_width)), 0)
    edges = _edges(n_bins)

    # Rounding can leave the maximum just past the last edge
    while edges[-1] < max_primary:
        n_bins += 1
        edges = _edges(n_bins)

    return edges


def _standard_error(values: np.ndarray) -> float:
    if values.size < 2:
        return math.nan
    return float(stats.sem(values, ddof=1))


def binned_means_arrays(
    primary: np.ndarray,
    secondary: np.ndarray,
    bin_width: float,
) -> list[BinSummary]:
    """Bin secondary values by primary value and summarize each bin.

    Inputs are expected to be cleaned already: finite and non-negative.
    No validation of the values is performed here. Counts and means are
    computed for all bins at once; only populated bins become summaries.

    Args:
        primary: Primary channel values (binned axis).
        secondary: Secondary channel values, paired with primary.
        bin_width: Width of each bin in primary units.

    Returns:
        BinSummary list ordered by ascending bin_edge, empty bins omitted.
        Single-observation bins carry a NaN standard error.
    """
    primary = np.asarray(primary, dtype=np.float64)
    secondary = np.asarray(secondary, dtype=np.float64)

    max_primary = float(primary.max()) if primary.size else 0.0
    edges = bin_edges(max_primary, bin_width)
    n_bins = len(edges) - 1

    # Index of the bin whose (lower, upper] interval holds each value;
    # a primary value of exactly 0 maps to -1 and joins no bin.
    bin_index = np.searchsorted(edges, primary, side="left") - 1
    inside = bin_index >= 0
    bin_index = bin_index[inside]
    values = secondary[inside]

    counts = np.bincount(bin_index, minlength=n_bins)
    sums = np.bincount(bin_index, weights=values, minlength=n_bins)
    means = np.full(n_bins, np.nan)
    np.divide(sums, counts, out=means, where=counts > 0)

    # Empty bins have an undefined mean and are dropped here
    occupied = np.flatnonzero(~np.isnan(means))

    # Cells grouped by bin; starts[j] is where occupied bin j begins
    order = np.argsort(bin_index, kind="stable")
    grouped = values[order]
    starts = np.searchsorted(bin_index[order], occupied, side="left")

    summaries = [
        BinSummary(
            bin_edge=float(edges[i + 1]),
            count=int(counts[i]),
            mean=float(means[i]),
            standard_error=_standard_error(grouped[start:start + counts[i]]),
        )
        for i, start in zip(occupied, starts)
    ]

    logger.debug(
        "Binned %d observations into %d non-empty bins of width %s",
        primary.size,
        len(summaries),
        bin_width,
    )
    return summaries


def binned_means(sample: Sample, bin_width: float) -> list[BinSummary]:
    """Summarize a sample's secondary channel in bins of its primary channel.

    Args:
        sample: Cleaned sample (see flow_binning.preprocessing).
        bin_width: Width of each bin in primary units.

    Returns:
        BinSummary list ordered by ascending bin_edge, empty bins omitted.
    """
    summaries = binned_means_arrays(sample.primary, sample.secondary, bin_width)
    logger.info(
        "Sample %s: %d cells in %d bins",
        sample.label,
        len(sample),
        len(summaries),
    )
    return summaries
