"""Sample data model for paired per-cell fluorescence readings."""

from dataclasses import dataclass
import numpy as np


@dataclass(frozen=True)
class Sample:
    """Paired primary/secondary measurements, one pair per cell.

    Attributes:
        label: Sample name used to tag its summaries in combined output.
        primary: Primary fluorescence channel values (the binned axis).
        secondary: Secondary fluorescence channel values (the averaged axis).
        primary_channel: Name of the primary channel in the source table.
        secondary_channel: Name of the secondary channel in the source table.
    """

    label: str
    primary: np.ndarray
    secondary: np.ndarray
    primary_channel: str = "primary"
    secondary_channel: str = "secondary"

    def __post_init__(self):
        """Coerce channels to read-only float arrays of equal length."""
        primary = np.array(self.primary, dtype=np.float64).ravel()
        secondary = np.array(self.secondary, dtype=np.float64).ravel()

        if len(primary) != len(secondary):
            raise ValueError(
                f"Primary and secondary channels must have same length. "
                f"Got {len(primary)} and {len(secondary)}"
            )

        primary.flags.writeable = False
        secondary.flags.writeable = False
        object.__setattr__(self, "primary", primary)
        object.__setattr__(self, "secondary", secondary)

    def with_values(self, primary: np.ndarray, secondary: np.ndarray) -> "Sample":
        """Return a new Sample with the same label and channel names."""
        return Sample(
            label=self.label,
            primary=primary,
            secondary=secondary,
            primary_channel=self.primary_channel,
            secondary_channel=self.secondary_channel,
        )

    def __len__(self) -> int:
        """Return number of observations."""
        return len(self.primary)
