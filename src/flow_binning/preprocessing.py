"""Cleaning and transforms applied to a sample before binning.

Flow cytometers report compensated intensities that can be zero or
negative, and exported tables may hold blanks. Binning is only defined
for positive readings, so invalid cells are removed with an explicit
predicate and the remaining intensities are usually moved to log scale.
"""

import logging

import numpy as np

from flow_binning.models.sample import Sample

logger = logging.getLogger(__name__)


def valid_observation_mask(primary: np.ndarray, secondary: np.ndarray) -> np.ndarray:
    """Return True where both channel values are finite and strictly positive."""
    primary = np.asarray(primary, dtype=np.float64)
    secondary = np.asarray(secondary, dtype=np.float64)
    return (
        np.isfinite(primary)
        & np.isfinite(secondary)
        & (primary > 0)
        & (secondary > 0)
    )


def drop_invalid(sample: Sample) -> Sample:
    """Return a new Sample without cells that fail valid_observation_mask."""
    mask = valid_observation_mask(sample.primary, sample.secondary)
    dropped = int(len(sample) - mask.sum())
    if dropped:
        logger.info(
            "Sample %s: dropped %d of %d cells with non-positive or missing values",
            sample.label,
            dropped,
            len(sample),
        )
    return sample.with_values(sample.primary[mask], sample.secondary[mask])


def log_transform(sample: Sample, base: float = 10.0) -> Sample:
    """Return a new Sample with both channels on a logarithmic scale.

    Args:
        sample: Sample with strictly positive values in both channels.
        base: Logarithm base (default 10, the usual cytometry decade scale).

    Returns:
        New Sample holding log_base of each value.

    Raises:
        ValueError: If base is invalid or any value is not positive.
    """
    if not base > 0 or base == 1:
        raise ValueError(f"Log base must be positive and not 1. Got {base}")

    if np.any(sample.primary <= 0) or np.any(sample.secondary <= 0):
        raise ValueError(
            f"Sample {sample.label} has non-positive values; "
            "drop invalid cells before log transform"
        )

    scale = np.log(base)
    return sample.with_values(
        np.log(sample.primary) / scale,
        np.log(sample.secondary) / scale,
    )


def prepare_sample(sample: Sample, log_base: float | None = 10.0) -> Sample:
    """Clean a raw sample and optionally log-transform it for binning.

    Readings at or below 1 become zero or negative on a log scale and fall
    outside the binning domain, so a second validity pass follows the
    transform.

    Args:
        sample: Raw sample as loaded.
        log_base: Logarithm base, or None to keep linear values.

    Returns:
        Sample ready for flow_binning.binning.binned_means.
    """
    cleaned = drop_invalid(sample)
    if log_base is None:
        return cleaned
    return drop_invalid(log_transform(cleaned, base=log_base))
