from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from .errors import UnsupportedExecutionError

if TYPE_CHECKING:
    from .plan import OutputSlot


class ChannelDescriptor(BaseModel):
    channel_type: str
    reusable: bool
    suitable_for_breakpoint: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    def __hash__(self) -> int:
        return hash((type(self), tuple(self.__dict__.values())))


class SyntheticChannelDescriptor(ChannelDescriptor):
    """Channel kind advertised by a synthetic platform.

    Identity is the concrete class, the reusability flag and ``kind_id``.
    """

    channel_type: str = "synthetic"
    kind_id: int = Field(..., ge=0)

    def create_channel(self, producer_slot: "OutputSlot | None" = None) -> "SyntheticChannel":
        return SyntheticChannel(self, producer_slot)

    def __str__(self) -> str:
        return f"Synthetic channel {self.kind_id} [{'r' if self.reusable else '-'}]"


class FileChannelDescriptor(ChannelDescriptor):
    channel_type: str = "file"
    location: str
    serialization: str

    def __str__(self) -> str:
        return f"File channel [{self.location}, {self.serialization}]"


# Durable, file-backed channel kind shared by every synthetic platform.
HDFS_OBJECT_FILE = FileChannelDescriptor(location="hdfs", serialization="object-file", reusable=True)


class SyntheticChannel:
    def __init__(self, descriptor: SyntheticChannelDescriptor, producer_slot: "OutputSlot | None" = None) -> None:
        self.descriptor = descriptor
        self.producer_slot = producer_slot
        self.consumers: list[Any] = []

    @property
    def reusable(self) -> bool:
        return self.descriptor.reusable

    def copy(self) -> "SyntheticChannel":
        duplicate = SyntheticChannel(self.descriptor, self.producer_slot)
        duplicate.consumers = list(self.consumers)
        return duplicate

    def create_instance(self, *args: Any, **kwargs: Any) -> Any:
        raise UnsupportedExecutionError("Execution not supported.")

    def __repr__(self) -> str:
        return f"SyntheticChannel({self.descriptor})"
