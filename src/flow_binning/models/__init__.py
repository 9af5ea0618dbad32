"""Data models for dual-color flow cytometry binning."""

from flow_binning.models.sample import Sample
from flow_binning.models.summary import BinSummary

__all__ = ["Sample", "BinSummary"]
