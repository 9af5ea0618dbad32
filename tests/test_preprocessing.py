"""Tests for sample cleaning and log transform."""

import logging

import numpy as np
import pytest

from flow_binning.models.sample import Sample
from flow_binning.preprocessing import (
    valid_observation_mask,
    drop_invalid,
    log_transform,
    prepare_sample,
)


@pytest.fixture
def raw_sample():
    """Sample with one invalid reading of each kind."""
    return Sample(
        label="raw",
        primary=np.array([100.0, 0.0, -3.0, np.nan, np.inf, 1000.0, 50.0]),
        secondary=np.array([10.0, 10.0, 10.0, 10.0, 10.0, 100.0, -1.0]),
        primary_channel="FITC-A",
        secondary_channel="PE-A",
    )


class TestValidObservationMask:
    """Tests for the validity predicate."""

    def test_flags_invalid_readings(self, raw_sample):
        """Zero, negative, NaN and infinite readings are invalid."""
        mask = valid_observation_mask(raw_sample.primary, raw_sample.secondary)
        assert mask.tolist() == [True, False, False, False, False, True, False]

    def test_all_valid(self):
        """Positive finite values pass."""
        mask = valid_observation_mask([1.0, 2.0], [0.5, 3.0])
        assert mask.all()


class TestDropInvalid:
    """Tests for removing invalid cells."""

    def test_keeps_only_valid_cells(self, raw_sample):
        """Only fully positive, finite pairs survive."""
        cleaned = drop_invalid(raw_sample)
        assert cleaned.primary.tolist() == [100.0, 1000.0]
        assert cleaned.secondary.tolist() == [10.0, 100.0]

    def test_preserves_metadata(self, raw_sample):
        """Label and channel names carry over."""
        cleaned = drop_invalid(raw_sample)
        assert cleaned.label == "raw"
        assert cleaned.primary_channel == "FITC-A"
        assert cleaned.secondary_channel == "PE-A"

    def test_original_untouched(self, raw_sample):
        """Cleaning returns a new sample."""
        drop_invalid(raw_sample)
        assert len(raw_sample) == 7

    def test_logs_dropped_count(self, raw_sample, caplog):
        """The number of dropped cells is logged."""
        with caplog.at_level(logging.INFO, logger="flow_binning.preprocessing"):
            drop_invalid(raw_sample)
        assert "dropped 5 of 7" in caplog.text


class TestLogTransform:
    """Tests for the logarithmic rescaling."""

    def test_base_ten(self):
        """Default base matches numpy log10."""
        sample = Sample(label="s", primary=[10.0, 250.0], secondary=[1000.0, 3.0])
        result = log_transform(sample)
        assert result.primary == pytest.approx(np.log10([10.0, 250.0]))
        assert result.secondary == pytest.approx(np.log10([1000.0, 3.0]))

    def test_other_base(self):
        """Any valid base is supported."""
        sample = Sample(label="s", primary=[8.0], secondary=[2.0])
        result = log_transform(sample, base=2)
        assert result.primary[0] == pytest.approx(3.0)
        assert result.secondary[0] == pytest.approx(1.0)

    def test_rejects_non_positive(self, raw_sample):
        """Raw data must be cleaned first."""
        with pytest.raises(ValueError, match="non-positive"):
            log_transform(raw_sample)

    @pytest.mark.parametrize("base", [1.0, 0.0, -10.0])
    def test_rejects_bad_base(self, base):
        """Base must be positive and not 1."""
        sample = Sample(label="s", primary=[10.0], secondary=[10.0])
        with pytest.raises(ValueError, match="Log base"):
            log_transform(sample, base=base)


class TestPrepareSample:
    """Tests for the full cleaning pipeline."""

    def test_linear(self, raw_sample):
        """Without a log base only cleaning is applied."""
        prepared = prepare_sample(raw_sample, log_base=None)
        assert prepared.primary.tolist() == [100.0, 1000.0]

    def test_log_scale(self, raw_sample):
        """Cleaned values are moved to log10 scale."""
        prepared = prepare_sample(raw_sample)
        assert prepared.primary == pytest.approx([2.0, 3.0])
        assert prepared.secondary == pytest.approx([1.0, 2.0])

    def test_drops_readings_at_or_below_one(self):
        """Values that become non-positive in log space are removed."""
        sample = Sample(
            label="dim",
            primary=[0.5, 1.0, 10.0, 100.0],
            secondary=[10.0, 10.0, 10.0, 10.0],
        )
        prepared = prepare_sample(sample, log_base=10.0)
        assert prepared.primary == pytest.approx([1.0, 2.0])
        assert len(prepared) == 2
