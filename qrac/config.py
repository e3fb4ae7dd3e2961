"""
Codec configuration.

The codec is driven by one immutable CodecConfig value that is passed to
every component at construction. Application defaults live in the packaged
default_config.yaml; the codec itself assumes none of them.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from .exceptions import ConfigurationError


DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "default_config.yaml")

# Each pixel carries one symbol per RGB channel.
SYMBOLS_PER_PIXEL = 3

FEC_TYPES = ("xor_parity", "reed_solomon")


def compute_interval_count(filler_max_value: int, interval_width: int) -> int:
    """Number of quantization intervals above the filler range (ceil division)."""
    available_range = 256 - (filler_max_value + 1)
    return available_range // interval_width + (1 if available_range % interval_width else 0)


@dataclass(frozen=True)
class CodecConfig:
    """
    Immutable codec configuration.

    Attributes:
        interval_width: L, width of each quantization interval (>= 1)
        filler_max_value: highest channel value treated as filler, in [0, 255)
        fec_redundancy_ratio: redundancy bytes per payload byte (>= 0)
        max_fec_warnings: residual FEC diagnostics emitted before truncation (>= 0)
        min_dimension: smallest width/height the planner returns (>= 1)
        fec_type: 'xor_parity' or 'reed_solomon'
        rs_nsym: parity symbols per codeword for the Reed-Solomon backend

    Raises:
        ConfigurationError: if any value is out of range, or the derived
            interval count is below 2 (no bit could be carried).
    """
    interval_width: int
    filler_max_value: int
    fec_redundancy_ratio: float
    max_fec_warnings: int
    min_dimension: int
    fec_type: str = "xor_parity"
    rs_nsym: int = 32

    def __post_init__(self):
        if self.interval_width < 1:
            raise ConfigurationError(
                f"interval_width must be >= 1, got {self.interval_width}"
            )
        if not 0 <= self.filler_max_value < 255:
            raise ConfigurationError(
                f"filler_max_value must be in [0, 255), got {self.filler_max_value}"
            )
        if self.fec_redundancy_ratio < 0:
            raise ConfigurationError(
                f"fec_redundancy_ratio must be >= 0, got {self.fec_redundancy_ratio}"
            )
        if self.max_fec_warnings < 0:
            raise ConfigurationError(
                f"max_fec_warnings must be >= 0, got {self.max_fec_warnings}"
            )
        if self.min_dimension < 1:
            raise ConfigurationError(
                f"min_dimension must be >= 1, got {self.min_dimension}"
            )
        if self.fec_type not in FEC_TYPES:
            raise ConfigurationError(f"Unknown FEC type: {self.fec_type}")

        intervals = compute_interval_count(self.filler_max_value, self.interval_width)
        if intervals < 2:
            raise ConfigurationError(
                f"Configuration yields {intervals} interval(s) "
                f"(L={self.interval_width}, filler_max_value={self.filler_max_value}); "
                f"at least 2 are required to carry a bit"
            )

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "CodecConfig":
        """
        Build a CodecConfig from the nested YAML layout.

        Required keys:
            quantization.interval_width, quantization.filler_max_value,
            fec.redundancy_ratio, fec.max_warnings, layout.min_dimension
        """
        try:
            quantization = config["quantization"]
            fec = config["fec"]
            layout = config["layout"]
            values = {
                "interval_width": int(quantization["interval_width"]),
                "filler_max_value": int(quantization["filler_max_value"]),
                "fec_redundancy_ratio": float(fec["redundancy_ratio"]),
                "max_fec_warnings": int(fec["max_warnings"]),
                "min_dimension": int(layout["min_dimension"]),
            }
        except KeyError as e:
            raise ConfigurationError(f"Missing required config key: {e}") from e
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid config value: {e}") from e

        values["fec_type"] = fec.get("type", "xor_parity")
        values["rs_nsym"] = int(fec.get("reed_solomon", {}).get("nsym", 32))
        return cls(**values)


@dataclass(frozen=True)
class SizingTiers:
    """Fixed square grid sizes used by auto sizing, keyed on original file size."""
    small_size: int = 128
    medium_size: int = 512
    large_size: int = 1024
    small_threshold: int = 96 * 1024
    medium_threshold: int = 1024 * 1024

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "SizingTiers":
        sizing = config.get("sizing", {})
        defaults = cls()
        return cls(
            small_size=int(sizing.get("small_size", defaults.small_size)),
            medium_size=int(sizing.get("medium_size", defaults.medium_size)),
            large_size=int(sizing.get("large_size", defaults.large_size)),
            small_threshold=int(sizing.get("small_threshold", defaults.small_threshold)),
            medium_threshold=int(sizing.get("medium_threshold", defaults.medium_threshold)),
        )


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load a configuration dictionary from YAML.

    Args:
        config_path: Path to a YAML file, or None for the packaged defaults

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config_path does not exist
        ConfigurationError: If the file is not a YAML mapping
    """
    path = config_path if config_path is not None else DEFAULT_CONFIG_PATH
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Malformed config file {path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return config


def default_codec_config() -> CodecConfig:
    """CodecConfig built from the packaged default_config.yaml."""
    return CodecConfig.from_dict(load_config())
