from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from .channels import ChannelDescriptor
from .config import Configuration
from .harness import SyntheticPlugin
from .platform import SyntheticPlatform


class CostModel(BaseModel):
    cpu_ms_per_cycle: float = Field(..., ge=0.0)
    disk_ms_per_byte: float = Field(..., ge=0.0)
    network_ms_per_byte: float = Field(..., ge=0.0)
    stretch: float = Field(..., ge=0.0)
    fix_costs: float = Field(..., ge=0.0)
    costs_per_ms: float = Field(..., ge=0.0)

    @classmethod
    def for_platform(cls, platform: SyntheticPlatform, configuration: Configuration) -> "CostModel":
        time_converter = platform.create_load_profile_to_time_converter(configuration)
        cost_converter = platform.create_time_to_cost_converter(configuration)
        return cls(
            cpu_ms_per_cycle=time_converter.cpu.ms_per_unit,
            disk_ms_per_byte=time_converter.disk.ms_per_unit,
            network_ms_per_byte=time_converter.network.ms_per_unit,
            stretch=time_converter.stretch,
            fix_costs=cost_converter.fix_costs,
            costs_per_ms=cost_converter.costs_per_ms,
        )


class PlatformReport(BaseModel):
    number: int = Field(..., ge=0)
    name: str
    configuration_name: str
    input_channels: list[str]
    broadcast_channels: list[str]
    output_channels: list[str]
    cost_model: CostModel


class ConversionReport(BaseModel):
    source: str
    target: str
    operator: str
    host_platform: int
    pinned_channel: str


class HarnessReport(BaseModel):
    generated_at: str
    num_platforms: int = Field(..., ge=1)
    target_density: float = Field(..., ge=0.0, le=1.0)
    num_channels: int = Field(..., ge=1)
    num_mappings: int = Field(..., ge=0)
    num_conversions: int = Field(..., ge=0)
    density: float = Field(..., ge=0.0)
    platforms: list[PlatformReport]
    mapped_operators: list[str] = Field(default_factory=list)
    conversions: list[ConversionReport]
    notes: list[str] = Field(default_factory=list)


def _names(channels: list[ChannelDescriptor]) -> list[str]:
    return [str(channel) for channel in channels]


def summarize(plugin: SyntheticPlugin, configuration: Configuration | None = None) -> HarnessReport:
    configuration = configuration or Configuration()
    platforms = [
        PlatformReport(
            number=platform.number,
            name=platform.name,
            configuration_name=platform.configuration_name,
            input_channels=_names(platform.input_channels),
            broadcast_channels=_names(platform.broadcast_channels),
            output_channels=_names(platform.output_channels),
            cost_model=CostModel.for_platform(platform, configuration),
        )
        for platform in plugin.required_platforms
    ]

    conversions = []
    for conversion in plugin.channel_conversions:
        # Building the converter is safe; only running it is not.
        operator = conversion.create_operator()
        conversions.append(
            ConversionReport(
                source=str(conversion.source),
                target=str(conversion.target),
                operator=operator.name or "",
                host_platform=operator.platform.number,
                pinned_channel=str(operator.supported_output_channels(0)[0]),
            )
        )

    first_platform = plugin.required_platforms[0]
    mapped = [m.template.kind for m in plugin.mappings if m.target_platform is first_platform]

    return HarnessReport(
        generated_at=datetime.now(timezone.utc).isoformat(),
        num_platforms=len(plugin.required_platforms),
        target_density=plugin.ccg_density,
        num_channels=plugin.num_channels,
        num_mappings=len(plugin.mappings),
        num_conversions=len(plugin.channel_conversions),
        density=plugin.density,
        platforms=platforms,
        mapped_operators=mapped,
        conversions=conversions,
        notes=[
            "Synthetic platforms advertise channels and cost models only; nothing can be executed.",
            "Default conversions are never removed, so the density may exceed the target.",
        ],
    )
