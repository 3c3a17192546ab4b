from __future__ import annotations

from typing import Any, NoReturn, Sequence, TypeVar, cast

from .channels import ChannelDescriptor
from .errors import SlotIndexMismatchError, UnsupportedExecutionError
from .plan import LoopHeadOperator, Operator, Slot
from .platform import SyntheticPlatform


SYNTHETIC_KIND = "synthetic"

S = TypeVar("S", bound=Slot)


class SyntheticOperator(Operator):
    """Execution operator bound to a synthetic platform.

    Either imitates the slot topology of a logical operator or is built from raw
    slot counts with a single pinned output channel kind.
    """

    def __init__(
        self,
        num_inputs: int,
        num_outputs: int,
        supports_broadcast_inputs: bool,
        platform: SyntheticPlatform,
        output_channels: Sequence[ChannelDescriptor],
        name: str | None = None,
    ) -> None:
        super().__init__(SYNTHETIC_KIND, num_inputs, num_outputs, supports_broadcast_inputs, name=name)
        self.platform = platform
        self._output_channels = tuple(output_channels)

    @classmethod
    def imitate(cls, blueprint: Operator, platform: SyntheticPlatform) -> "SyntheticOperator":
        """Copy the regular inputs and all outputs of ``blueprint``; broadcast inputs are left out."""
        operator = cls(
            blueprint.num_regular_inputs,
            blueprint.num_outputs,
            blueprint.supports_broadcast_inputs,
            platform,
            platform.output_channels,
        )
        operator._copy_slots_from(blueprint)
        return operator

    @classmethod
    def pinned(
        cls,
        num_inputs: int,
        num_outputs: int,
        supports_broadcast_inputs: bool,
        platform: SyntheticPlatform,
        output_channel: ChannelDescriptor,
    ) -> "SyntheticOperator":
        return cls(num_inputs, num_outputs, supports_broadcast_inputs, platform, [output_channel])

    def _copy_slots_from(self, blueprint: Operator) -> None:
        self.inputs = [blueprint.inputs[i].copy_for(self) for i in range(blueprint.num_regular_inputs)]
        self.outputs = [slot.copy_for(self) for slot in blueprint.outputs]
        self.name = blueprint.name or blueprint.kind

    def supported_input_channels(self, index: int) -> list[ChannelDescriptor]:
        if self.inputs[index].broadcast:
            return list(self.platform.broadcast_channels)
        return list(self.platform.input_channels)

    def supported_output_channels(self, index: int) -> list[ChannelDescriptor]:
        return list(self._output_channels)

    def create_instance(self, *args: Any, **kwargs: Any) -> NoReturn:
        raise UnsupportedExecutionError(f"{self} cannot be executed.")

    def __repr__(self) -> str:
        return f"Synthetic[platform {self.platform.number}, {self.name}]"


class SyntheticLoopHeadOperator(SyntheticOperator):
    is_loop_head = True

    def __init__(self, blueprint: LoopHeadOperator, platform: SyntheticPlatform) -> None:
        super().__init__(
            blueprint.num_regular_inputs,
            blueprint.num_outputs,
            blueprint.supports_broadcast_inputs,
            platform,
            platform.output_channels,
        )
        self.num_expected_iterations = blueprint.num_expected_iterations
        self._copy_slots_from(blueprint)

        self.initialization_inputs = _translate_slots(blueprint.initialization_inputs, self.inputs)
        self.condition_inputs = _translate_slots(blueprint.condition_inputs, self.inputs)
        self.loop_body_inputs = _translate_slots(blueprint.loop_body_inputs, self.inputs)
        self.loop_body_outputs = _translate_slots(blueprint.loop_body_outputs, self.outputs)
        self.condition_outputs = _translate_slots(blueprint.condition_outputs, self.outputs)
        self.final_outputs = _translate_slots(blueprint.final_outputs, self.outputs)

    @classmethod
    def imitate(cls, blueprint: LoopHeadOperator, platform: SyntheticPlatform) -> "SyntheticLoopHeadOperator":
        return cls(blueprint, platform)


def _translate_slots(original_slots: Sequence[S], copies: Sequence[S]) -> list[S]:
    # Copies are index-aligned with the originals.
    translated: list[S] = []
    for slot in original_slots:
        if not 0 <= slot.index < len(copies) or copies[slot.index].index != slot.index:
            raise SlotIndexMismatchError(f"No copy for {slot} among {len(copies)} slots")
        translated.append(copies[slot.index])
    return translated


def wrap(source: Operator, platform: SyntheticPlatform) -> SyntheticOperator:
    if source.is_loop_head:
        return SyntheticLoopHeadOperator.imitate(cast(LoopHeadOperator, source), platform)
    return SyntheticOperator.imitate(source, platform)
