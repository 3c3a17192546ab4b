from __future__ import annotations

import math

from .errors import DensityUnsatisfiableError


CHANNELS_PER_PLATFORM = 3
DEFAULT_CONVERSIONS_PER_PLATFORM = 5
EXTERNAL_CHANNELS = 1


def total_channel_count(num_platforms: int) -> int:
    return EXTERNAL_CHANNELS + CHANNELS_PER_PLATFORM * num_platforms


def ordered_pair_count(num_channels: int) -> int:
    return num_channels * (num_channels - 1)


def target_conversion_count(num_platforms: int, density: float) -> int:
    if not 0.0 <= density <= 1.0:
        raise ValueError(f"density must be within [0, 1]: {density}")
    num_channels = total_channel_count(num_platforms)
    # Halves round up.
    return math.floor(ordered_pair_count(num_channels) * density + 0.5)


def cross_platform_pair_space(num_platforms: int) -> int:
    """Number of directed channel pairs whose ends live on different platforms."""
    return CHANNELS_PER_PLATFORM * num_platforms * CHANNELS_PER_PLATFORM * (num_platforms - 1)


def graph_density(num_channels: int, num_conversions: int) -> float:
    pairs = ordered_pair_count(num_channels)
    if pairs <= 0:
        return 0.0
    return num_conversions / pairs


def random_conversion_count(num_platforms: int, density: float, existing: int) -> int:
    """How many random conversions must be added on top of ``existing`` ones.

    Existing conversions are never removed, so a target below ``existing`` yields 0.
    """
    missing = target_conversion_count(num_platforms, density) - existing
    if missing <= 0:
        return 0
    available = cross_platform_pair_space(num_platforms)
    if missing > available:
        raise DensityUnsatisfiableError(
            f"density {density} needs {missing} cross-platform conversions but only {available} "
            f"channel pairs span distinct platforms (num_platforms={num_platforms})"
        )
    return missing
