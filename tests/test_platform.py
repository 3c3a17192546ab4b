import pytest

from synthetic_platforms.config import Configuration
from synthetic_platforms.costs import LoadEstimate, LoadProfile, TimeEstimate
from synthetic_platforms.errors import UnsupportedExecutionError
from synthetic_platforms.platform import ChannelIdGenerator, SyntheticPlatform


def test_channel_roles() -> None:
    platform = SyntheticPlatform(0)
    assert len(platform.input_channels) == 2
    assert len(platform.broadcast_channels) == 1
    assert len(platform.output_channels) == 1
    assert set(platform.input_channels) == {platform.reusable, platform.non_reusable}
    assert platform.broadcast_channels == [platform.broadcast]
    assert platform.output_channels == [platform.non_reusable]
    assert not platform.non_reusable.reusable
    assert platform.reusable.reusable
    assert platform.broadcast.reusable
    assert len(platform.channels) == 3


def test_shared_generator_allocates_unique_ids_in_order() -> None:
    ids = ChannelIdGenerator()
    platforms = [SyntheticPlatform(n, ids) for n in range(5)]
    allocated = [
        channel.kind_id
        for platform in platforms
        for channel in (platform.non_reusable, platform.reusable, platform.broadcast)
    ]
    assert allocated == list(range(15))
    assert ids.allocated == 15


def test_standalone_platforms_use_private_counters() -> None:
    a, b = SyntheticPlatform(0), SyntheticPlatform(1)
    assert a.non_reusable.kind_id == b.non_reusable.kind_id == 0
    assert a.broadcast.kind_id == 2


def test_names_are_namespaced_by_number() -> None:
    platform = SyntheticPlatform(3)
    assert platform.name == "Synthetic platform 3"
    assert platform.configuration_name == "synthetic-3"


def test_default_cost_model() -> None:
    platform = SyntheticPlatform(0)
    converter = platform.create_load_profile_to_time_converter(Configuration())
    profile = LoadProfile(
        cpu=LoadEstimate(lower=3_000_000, upper=6_000_000),
        disk=LoadEstimate.exactly(1_000_000),
        network=LoadEstimate.exactly(5_000),
    )
    # 3000 MHz, 1 core: 3e6 cycles = 1 ms; 1 MB at 100 ms/MB = 100 ms; network is free.
    time = converter.convert(profile)
    assert time.lower == pytest.approx(101.0)
    assert time.upper == pytest.approx(102.0)

    cost = platform.create_time_to_cost_converter(Configuration()).convert(time)
    assert cost.lower == pytest.approx(101.0)
    assert cost.upper == pytest.approx(102.0)


def test_cost_model_reads_namespaced_properties() -> None:
    configuration = Configuration(
        properties={
            "synthetic.synthetic-1.cpu.mhz": 1000,
            "synthetic.synthetic-1.cpu.cores": 2,
            "synthetic.synthetic-1.stretch": 3,
            "synthetic.synthetic-1.costs.fix": 5,
            "synthetic.synthetic-1.costs.per-ms": 0.5,
        }
    )
    configured = SyntheticPlatform(1)
    untouched = SyntheticPlatform(0)

    profile = LoadProfile(cpu=LoadEstimate.exactly(2_000_000))
    time = configured.create_load_profile_to_time_converter(configuration).convert(profile)
    # 2e6 cycles on 2 x 1000 MHz = 1 ms, stretched by 3.
    assert time.lower == pytest.approx(3.0)
    cost = configured.create_time_to_cost_converter(configuration).convert(time)
    assert cost.lower == pytest.approx(5 + 0.5 * 3.0)

    default_time = untouched.create_load_profile_to_time_converter(configuration).convert(profile)
    assert default_time.lower == pytest.approx(2_000_000 / 3_000_000)


def test_converters_are_pure() -> None:
    converter = SyntheticPlatform(0).create_time_to_cost_converter(Configuration())
    time = TimeEstimate(lower=1.0, upper=2.0)
    assert converter.convert(time) == converter.convert(time)
    assert converter.convert_without_fix_costs(time).upper == pytest.approx(2.0)


def test_invalid_property_value_rejected() -> None:
    configuration = Configuration(properties={"synthetic.synthetic-0.cpu.mhz": "fast"})
    with pytest.raises(ValueError, match="not an integer"):
        SyntheticPlatform(0).create_load_profile_to_time_converter(configuration)


def test_executor_factory_always_fails() -> None:
    with pytest.raises(UnsupportedExecutionError):
        SyntheticPlatform(0).executor_factory
