"""Per-bin summary record."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class BinSummary:
    """Aggregate of the secondary channel over one non-empty bin.

    Bins are labeled by their right edge: a summary with ``bin_edge=1.0``
    and bin width 0.5 covers primary values in (0.5, 1.0].

    Attributes:
        bin_edge: Upper bound of the bin interval.
        count: Number of observations in the bin (always > 0).
        mean: Arithmetic mean of the secondary values.
        standard_error: Sample standard deviation (n-1) over sqrt(count).
            NaN when the bin holds a single observation.
    """

    bin_edge: float
    count: int
    mean: float
    standard_error: float

    @property
    def has_standard_error(self) -> bool:
        """Whether the standard error is defined (count > 1)."""
        return not math.isnan(self.standard_error)

    def to_dict(self) -> dict:
        """Convert to a JSON-safe dictionary (undefined values become None)."""
        return {
            "bin_edge": self.bin_edge,
            "count": self.count,
            "mean": self.mean,
            "standard_error": self.standard_error if self.has_standard_error else None,
        }
