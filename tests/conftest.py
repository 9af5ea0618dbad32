"""Pytest fixtures for flow_binning tests."""

from pathlib import Path

import numpy as np
import pytest

from flow_binning.models.sample import Sample


@pytest.fixture
def worked_example():
    """Four cells split evenly across two bins of width 0.5."""
    return Sample(
        label="worked",
        primary=np.array([0.1, 0.2, 0.6, 0.6]),
        secondary=np.array([1.0, 3.0, 5.0, 7.0]),
    )


@pytest.fixture
def log_normal_sample():
    """Correlated dual-color population in linear intensity units."""
    rng = np.random.default_rng(42)
    fitc = rng.lognormal(mean=6.0, sigma=1.0, size=5000)
    pe = fitc * rng.lognormal(mean=0.0, sigma=0.3, size=5000)
    return Sample(
        label="lognormal",
        primary=fitc,
        secondary=pe,
        primary_channel="FITC-A",
        secondary_channel="PE-A",
    )


@pytest.fixture
def uniform_arrays():
    """Positive primary/secondary arrays for property checks."""
    rng = np.random.default_rng(7)
    primary = rng.uniform(0.01, 4.0, size=2000)
    secondary = rng.uniform(1.0, 10.0, size=2000)
    return primary, secondary


@pytest.fixture
def write_csv(tmp_path: Path):
    """Factory writing a CSV file into tmp_path and returning its path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write


@pytest.fixture
def control_csv(write_csv):
    """Exported table with two fluorescence channels and an unused column."""
    return write_csv(
        "control.csv",
        "FSC-A,FITC-A,PE-A\n"
        "50000,10,20\n"
        "51000,20,40\n"
        "52000,200,100\n"
        "53000,-5,30\n"
        "54000,300,\n"
        "55000,1000,2000\n",
    )


@pytest.fixture
def treated_csv(write_csv):
    """Second sample with the same channels."""
    return write_csv(
        "treated.csv",
        "FSC-A,FITC-A,PE-A\n"
        "50000,15,300\n"
        "51000,25,500\n"
        "52000,2500,9000\n",
    )
