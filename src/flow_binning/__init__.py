"""Flow Binning - Binned means of one fluorescence channel against another."""

__version__ = "0.1.0"

from flow_binning.models.sample import Sample
from flow_binning.models.summary import BinSummary
from flow_binning.binning.aggregator import binned_means

__all__ = ["Sample", "BinSummary", "binned_means", "__version__"]
