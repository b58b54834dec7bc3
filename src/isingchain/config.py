"""
Model configuration for the open transverse-field Ising chain.

H = Σ h_i X_i + Σ J_i Z_i Z_{i+1}
"""

import numbers
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .basis import check_num_sites


class ConfigurationError(ValueError):
    """Raised when chain parameters are inconsistent."""


@dataclass(frozen=True)
class ModelConfig:
    """Validated chain parameters, strengths broadcast to one entry per site."""
    num_sites: int
    field_strength: tuple[float, ...]
    coupling_strength: tuple[float, ...]

    @property
    def dim(self) -> int:
        """Hilbert space dimension 2^N."""
        return 2**self.num_sites


def _broadcast(name: str, values: Sequence[float], num_sites: int) -> tuple[float, ...]:
    try:
        arr = np.asarray(values)
    except (TypeError, ValueError) as err:
        raise ConfigurationError(f"{name} must be a sequence of real numbers") from err

    if not (np.issubdtype(arr.dtype, np.integer) or np.issubdtype(arr.dtype, np.floating)
            or arr.dtype == bool):
        raise ConfigurationError(
            f"{name} must contain real numbers, got dtype {arr.dtype}")

    if arr.ndim != 1:
        raise ConfigurationError(
            f"{name} must be a 1-D sequence, got shape {arr.shape}")

    if not np.all(np.isfinite(arr)):
        raise ConfigurationError(f"{name} must be finite")

    if len(arr) == 1:
        arr = np.repeat(arr, num_sites)
    elif len(arr) != num_sites:
        raise ConfigurationError(
            f"{name} has length {len(arr)}, expected 1 or num_sites={num_sites}")

    return tuple(float(x) for x in arr)


def make_config(num_sites: int, field_strength: Sequence[float],
                coupling_strength: Sequence[float]) -> ModelConfig:
    """
    Validate chain parameters and broadcast length-1 strengths.

    Args:
        num_sites: Number of sites N (>= 1)
        field_strength: Transverse field h_i, length 1 or N
        coupling_strength: Bond coupling J_i, length 1 or N. The last entry
            has no bond to act on for an open chain and is ignored.

    Returns:
        ModelConfig with both strengths of length N

    Raises:
        ConfigurationError: On a bad site count or strength length
        OverflowError: If 2^num_sites exceeds the int64 index range
    """
    if isinstance(num_sites, bool) or not isinstance(num_sites, numbers.Integral):
        raise ConfigurationError(f"num_sites must be an integer, got {num_sites!r}")
    num_sites = int(num_sites)
    if num_sites < 1:
        raise ConfigurationError(f"num_sites must be >= 1, got {num_sites}")
    check_num_sites(num_sites)

    return ModelConfig(
        num_sites=num_sites,
        field_strength=_broadcast("field_strength", field_strength, num_sites),
        coupling_strength=_broadcast("coupling_strength", coupling_strength, num_sites),
    )
