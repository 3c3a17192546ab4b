from __future__ import annotations

import threading
from typing import NoReturn

from .channels import SyntheticChannelDescriptor
from .config import (
    COSTS_PER_MS_DEFAULT,
    CPU_CORES_DEFAULT,
    CPU_MHZ_DEFAULT,
    FIX_COSTS_DEFAULT,
    HDFS_MS_PER_MB_DEFAULT,
    STRETCH_DEFAULT,
    Configuration,
    platform_key,
)
from .costs import LoadProfileToTimeConverter, LoadToTimeConverter, TimeToCostConverter
from .errors import UnsupportedExecutionError


class ChannelIdGenerator:
    """Hands out channel-kind ids, shared by all platforms of one harness."""

    def __init__(self, start: int = 0) -> None:
        self._next = start
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value

    @property
    def allocated(self) -> int:
        return self._next


class SyntheticPlatform:
    """A platform that advertises channel kinds and a cost model but cannot execute.

    Every platform owns three channel kinds: a non-reusable one (also its only
    output kind), a reusable one and a broadcast one. Ids come from
    ``id_generator``; without one a private counter starting at 0 is used, so
    platforms that must not collide have to share a generator.
    """

    def __init__(self, number: int, id_generator: ChannelIdGenerator | None = None) -> None:
        self.number = number
        self.name = f"Synthetic platform {number}"
        self.configuration_name = f"synthetic-{number}"

        if id_generator is None:
            id_generator = ChannelIdGenerator()
        self.non_reusable = SyntheticChannelDescriptor(kind_id=id_generator.next_id(), reusable=False)
        self.reusable = SyntheticChannelDescriptor(kind_id=id_generator.next_id(), reusable=True)
        self.broadcast = SyntheticChannelDescriptor(kind_id=id_generator.next_id(), reusable=True)

        self._input_channels = (self.reusable, self.non_reusable)
        self._broadcast_channels = (self.broadcast,)
        self._output_channels = (self.non_reusable,)

    @property
    def input_channels(self) -> list[SyntheticChannelDescriptor]:
        return list(self._input_channels)

    @property
    def broadcast_channels(self) -> list[SyntheticChannelDescriptor]:
        return list(self._broadcast_channels)

    @property
    def output_channels(self) -> list[SyntheticChannelDescriptor]:
        return list(self._output_channels)

    @property
    def channels(self) -> list[SyntheticChannelDescriptor]:
        return [self.broadcast, self.reusable, self.non_reusable]

    def _key(self, suffix: str) -> str:
        return platform_key(self.configuration_name, suffix)

    def create_load_profile_to_time_converter(self, configuration: Configuration) -> LoadProfileToTimeConverter:
        cpu_mhz = configuration.get_long_property(self._key("cpu.mhz"), CPU_MHZ_DEFAULT)
        num_cores = configuration.get_long_property(self._key("cpu.cores"), CPU_CORES_DEFAULT)
        hdfs_ms_per_mb = configuration.get_double_property(self._key("hdfs.ms-per-mb"), HDFS_MS_PER_MB_DEFAULT)
        stretch = configuration.get_double_property(self._key("stretch"), STRETCH_DEFAULT)
        if cpu_mhz <= 0 or num_cores <= 0:
            raise ValueError(f"{self.name}: cpu.mhz and cpu.cores must be positive (got {cpu_mhz}, {num_cores})")
        return LoadProfileToTimeConverter(
            # CPU load is in cycles, disk load in bytes.
            cpu=LoadToTimeConverter.linear(1 / (num_cores * cpu_mhz * 1000.0)),
            disk=LoadToTimeConverter.linear(hdfs_ms_per_mb / 1_000_000.0),
            network=LoadToTimeConverter.linear(0.0),
            stretch=stretch,
        )

    def create_time_to_cost_converter(self, configuration: Configuration) -> TimeToCostConverter:
        return TimeToCostConverter(
            fix_costs=configuration.get_double_property(self._key("costs.fix"), FIX_COSTS_DEFAULT),
            costs_per_ms=configuration.get_double_property(self._key("costs.per-ms"), COSTS_PER_MS_DEFAULT),
        )

    @property
    def executor_factory(self) -> NoReturn:
        raise UnsupportedExecutionError(f"{self.name} does not support execution.")

    def __repr__(self) -> str:
        return f"SyntheticPlatform({self.number})"
