from __future__ import annotations

import logging
import random
from typing import Callable, Sequence

from pydantic import BaseModel, ConfigDict

from .channels import HDFS_OBJECT_FILE, ChannelDescriptor, SyntheticChannelDescriptor
from .errors import DensityUnsatisfiableError
from .operators import SyntheticOperator
from .platform import SyntheticPlatform
from .stats import random_conversion_count


logger = logging.getLogger(__name__)

RANDOM_CONVERSION_LABEL = "Random conversion"

OperatorFactory = Callable[[], SyntheticOperator]


class ChannelConversion(BaseModel):
    """Edge of the channel conversion graph.

    The converting operator is only built when ``create_operator`` is called.
    """

    source: ChannelDescriptor
    target: ChannelDescriptor
    operator_factory: OperatorFactory

    model_config = ConfigDict(frozen=True)

    @property
    def pair(self) -> tuple[ChannelDescriptor, ChannelDescriptor]:
        return (self.source, self.target)

    def create_operator(self) -> SyntheticOperator:
        return self.operator_factory()

    def __str__(self) -> str:
        return f"{self.source} -> {self.target}"


def _converter_factory(platform: SyntheticPlatform, channel: ChannelDescriptor, label: str) -> OperatorFactory:
    def factory() -> SyntheticOperator:
        operator = SyntheticOperator.pinned(1, 1, False, platform, channel)
        operator.with_name(label)
        return operator

    return factory


def default_channel_conversions(
    platform: SyntheticPlatform,
    external: ChannelDescriptor = HDFS_OBJECT_FILE,
) -> list[ChannelConversion]:
    """The five conversions every platform gets, within itself and to/from ``external``."""
    non_reusable, reusable, broadcast = platform.non_reusable, platform.reusable, platform.broadcast
    specs = [
        (non_reusable, reusable, reusable, "Convert non-reusable to reusable"),
        (reusable, broadcast, broadcast, "Convert reusable to broadcast"),
        (reusable, external, external, "Write reusable to HDFS"),
        (non_reusable, external, external, "Write non-reusable to HDFS"),
        # Pinned to the reusable kind even though the edge targets the non-reusable one.
        (external, non_reusable, reusable, "Read non-reusable from HDFS"),
    ]
    return [
        ChannelConversion(source=source, target=target, operator_factory=_converter_factory(platform, pinned, label))
        for source, target, pinned, label in specs
    ]


def _pick_channel(platform: SyntheticPlatform, rng: random.Random) -> SyntheticChannelDescriptor:
    channels = platform.channels
    return channels[rng.randrange(len(channels))]


def _cross_platform_pairs(
    platforms: Sequence[SyntheticPlatform],
) -> set[tuple[ChannelDescriptor, ChannelDescriptor]]:
    return {
        (source, target)
        for p1 in platforms
        for p2 in platforms
        if p1 is not p2
        for source in p1.channels
        for target in p2.channels
    }


def random_channel_conversions(
    platforms: Sequence[SyntheticPlatform],
    count: int,
    rng: random.Random,
    taken: set[tuple[ChannelDescriptor, ChannelDescriptor]] | None = None,
) -> list[ChannelConversion]:
    """Sample ``count`` new conversions between channels of distinct platforms.

    Pairs in ``taken`` are never produced.
    """
    if count <= 0:
        return []
    seen = set(taken or ())
    free = len(_cross_platform_pairs(platforms) - seen)
    if count > free:
        raise DensityUnsatisfiableError(
            f"cannot sample {count} new cross-platform conversions: only {free} channel pairs are free"
        )
    pairs: list[tuple[SyntheticChannelDescriptor, SyntheticChannelDescriptor]] = []
    while len(pairs) < count:
        r1 = rng.randrange(len(platforms))
        r2 = rng.randrange(len(platforms))
        while r1 == r2:
            r2 = rng.randrange(len(platforms))
        pair = (_pick_channel(platforms[r1], rng), _pick_channel(platforms[r2], rng))
        if pair in seen:
            continue
        seen.add(pair)
        pairs.append(pair)

    conversions: list[ChannelConversion] = []
    for source, target in pairs:
        host = platforms[rng.randrange(len(platforms))]
        conversions.append(
            ChannelConversion(
                source=source,
                target=target,
                operator_factory=_converter_factory(host, target, RANDOM_CONVERSION_LABEL),
            )
        )
    return conversions


def build_conversion_graph(
    platforms: Sequence[SyntheticPlatform],
    density: float,
    rng: random.Random | None = None,
    external: ChannelDescriptor = HDFS_OBJECT_FILE,
) -> list[ChannelConversion]:
    conversions: list[ChannelConversion] = []
    for platform in platforms:
        conversions.extend(default_channel_conversions(platform, external))

    num_random = random_conversion_count(len(platforms), density, len(conversions))
    if num_random == 0:
        return conversions

    logger.info(
        "Adding %d more random channel conversions to reach a channel conversion graph density of %s.",
        num_random,
        density,
    )
    taken = {conversion.pair for conversion in conversions}
    conversions.extend(random_channel_conversions(platforms, num_random, rng or random.Random(), taken))
    return conversions
