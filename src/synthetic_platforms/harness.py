from __future__ import annotations

import logging
import random
from typing import Iterable

from .catalog import default_operator_catalog, select_operators
from .config import Configuration, HarnessConfig
from .conversions import ChannelConversion, build_conversion_graph
from .mapping import SyntheticMapping, build_mappings_for_platform
from .plan import Operator
from .platform import ChannelIdGenerator, SyntheticPlatform
from .stats import graph_density, total_channel_count


logger = logging.getLogger(__name__)


class SyntheticPlugin:
    """Provides synthetic platforms with their mappings and channel conversions.

    Everything is built eagerly in the constructor and is read-only afterwards.
    Mappings are only created when ``operators`` is given.
    """

    def __init__(
        self,
        num_platforms: int,
        ccg_density: float,
        operators: Iterable[Operator] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if num_platforms < 1:
            raise ValueError(f"num_platforms must be >= 1: {num_platforms}")
        if not 0.0 <= ccg_density <= 1.0:
            raise ValueError(f"ccg_density must be within [0, 1]: {ccg_density}")
        self.ccg_density = ccg_density

        id_generator = ChannelIdGenerator()
        self._platforms = tuple(SyntheticPlatform(number, id_generator) for number in range(num_platforms))
        logger.info("Added %d synthetic platforms.", len(self._platforms))

        mapped_operators = list(operators) if operators is not None else []
        mappings: list[SyntheticMapping] = []
        for platform in self._platforms:
            mappings.extend(build_mappings_for_platform(mapped_operators, platform))
        self._mappings = tuple(mappings)
        logger.info("Added %d operator mappings per synthetic platform.", len(mapped_operators))

        num_channels = total_channel_count(num_platforms)
        self._conversions = tuple(build_conversion_graph(self._platforms, ccg_density, rng))
        logger.info(
            "Channel conversion graph comprises %d channels and %d conversions (density = %.4f).",
            num_channels,
            len(self._conversions),
            graph_density(num_channels, len(self._conversions)),
        )

    @classmethod
    def from_config(cls, config: HarnessConfig) -> "SyntheticPlugin":
        if config.operators is None:
            operators = None
        elif config.operators == ["*"]:
            operators = default_operator_catalog()
        else:
            operators = select_operators(config.operators)
        rng = random.Random(config.seed) if config.seed is not None else None
        return cls(config.num_platforms, config.ccg_density, operators=operators, rng=rng)

    @property
    def required_platforms(self) -> tuple[SyntheticPlatform, ...]:
        return self._platforms

    @property
    def mappings(self) -> tuple[SyntheticMapping, ...]:
        return self._mappings

    @property
    def channel_conversions(self) -> tuple[ChannelConversion, ...]:
        return self._conversions

    @property
    def num_channels(self) -> int:
        return total_channel_count(len(self._platforms))

    @property
    def density(self) -> float:
        return graph_density(self.num_channels, len(self._conversions))

    def set_properties(self, configuration: Configuration) -> None:
        pass
