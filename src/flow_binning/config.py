"""
Run configuration for binning several samples.

A config names the two channels, the bin width, the transform and the
list of sample files. It is stored as YAML:

    bin_width: 0.1
    primary_column: FITC-A
    secondary_column: PE-A
    log_base: 10
    samples:
      - path: data/control.csv
        label: control
      - path: data/treated.csv
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml


@dataclass
class SampleSource:
    """One sample file and the label its summaries are tagged with."""

    path: Path
    label: str | None = None

    def __post_init__(self):
        self.path = Path(self.path)

    @property
    def resolved_label(self) -> str:
        return self.label or self.path.stem

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"path": str(self.path)}
        if self.label:
            result["label"] = self.label
        return result


@dataclass
class BinningConfig:
    """Configuration for a binning run."""

    primary_column: str
    secondary_column: str

    bin_width: float = 0.1
    log_base: float | None = 10.0  # None keeps linear intensities

    samples: list[SampleSource] = field(default_factory=list)

    description: str = ""

    def validate(self) -> None:
        """Check values that would make the run meaningless.

        Raises:
            ValueError: Describing every problem found.
        """
        errors = []
        if not self.bin_width > 0:
            errors.append(f"bin_width must be positive (got {self.bin_width})")
        if self.log_base is not None and (not self.log_base > 0 or self.log_base == 1):
            errors.append(f"log_base must be positive and not 1 (got {self.log_base})")
        if not self.primary_column or not self.secondary_column:
            errors.append("primary_column and secondary_column are required")

        labels = [s.resolved_label for s in self.samples]
        duplicates = sorted({label for label in labels if labels.count(label) > 1})
        if duplicates:
            errors.append(f"duplicate sample labels: {', '.join(duplicates)}")

        if errors:
            raise ValueError("Invalid config: " + "; ".join(errors))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "samples":
                result[f.name] = [s.to_dict() for s in value]
            else:
                result[f.name] = value
        return result

    def to_yaml(self) -> str:
        """Convert to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def save(self, path: Path | str) -> None:
        """Save config to YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            f.write(self.to_yaml())

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: Path | None = None) -> "BinningConfig":
        """Create config from dictionary.

        Args:
            data: Parsed config values. Unknown keys are ignored.
            base_dir: Directory that relative sample paths are resolved against.
        """
        data = dict(data)

        samples = []
        for entry in data.get("samples") or []:
            if isinstance(entry, (str, Path)):
                entry = {"path": entry}
            source = SampleSource(path=entry["path"], label=entry.get("label"))
            if base_dir is not None and not source.path.is_absolute():
                source.path = base_dir / source.path
            samples.append(source)
        data["samples"] = samples

        if data.get("bin_width") is not None:
            data["bin_width"] = float(data["bin_width"])
        if data.get("log_base") is not None:
            data["log_base"] = float(data["log_base"])

        # Filter to valid fields
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_fields}

        return cls(**filtered)

    @classmethod
    def from_yaml(cls, text: str, base_dir: Path | None = None) -> "BinningConfig":
        """Create config from a YAML string."""
        data = yaml.safe_load(text) or {}
        if not isinstance(data, dict):
            raise ValueError("Config must be a YAML mapping")
        return cls.from_dict(data, base_dir=base_dir)

    @classmethod
    def load(cls, path: Path | str) -> "BinningConfig":
        """Load and validate a config file.

        Relative sample paths are taken relative to the file's directory.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")

        try:
            config = cls.from_yaml(path.read_text(), base_dir=path.parent)
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed config {path}: {e}") from e

        config.validate()
        return config


def template_config() -> BinningConfig:
    """Starter config written by `flow-binning init-config`."""
    return BinningConfig(
        primary_column="FITC-A",
        secondary_column="PE-A",
        bin_width=0.1,
        log_base=10.0,
        samples=[
            SampleSource(path=Path("data/sample_a.csv"), label="sample_a"),
            SampleSource(path=Path("data/sample_b.csv"), label="sample_b"),
        ],
        description="Mean PE signal per FITC bin",
    )
