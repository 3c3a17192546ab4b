"""Minimal logical-plan model consumed by the substitution mechanism.

Operators own index-aligned arrays of input and output slots. Regular inputs
come first; broadcast inputs are appended behind them.
"""

from __future__ import annotations

from typing import Any, Sequence


class Slot:
    def __init__(self, name: str, owner: "Operator", index: int, data_type: Any = None) -> None:
        self.name = name
        self.owner = owner
        self.index = index
        self.data_type = data_type

    @property
    def broadcast(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, index={self.index}, owner={self.owner})"


class InputSlot(Slot):
    def __init__(
        self,
        name: str,
        owner: "Operator",
        index: int,
        broadcast: bool = False,
        data_type: Any = None,
    ) -> None:
        super().__init__(name, owner, index, data_type)
        self._broadcast = broadcast

    @property
    def broadcast(self) -> bool:
        return self._broadcast

    def copy_for(self, owner: "Operator") -> "InputSlot":
        """Structural copy for ``owner``; the payload type is not carried over."""
        return InputSlot(self.name, owner, self.index, broadcast=self.broadcast)


class OutputSlot(Slot):
    def copy_for(self, owner: "Operator") -> "OutputSlot":
        return OutputSlot(self.name, owner, self.index)


class Operator:
    is_loop_head = False

    def __init__(
        self,
        kind: str,
        num_inputs: int,
        num_outputs: int,
        supports_broadcast_inputs: bool = False,
        name: str | None = None,
        input_names: Sequence[str] | None = None,
        output_names: Sequence[str] | None = None,
    ) -> None:
        if num_inputs < 0 or num_outputs < 0:
            raise ValueError(f"slot counts must be non-negative: inputs={num_inputs} outputs={num_outputs}")
        self.kind = kind
        self.name = name
        self.supports_broadcast_inputs = supports_broadcast_inputs
        self.epoch = 0
        self._num_regular_inputs = num_inputs
        self.inputs: list[InputSlot] = [
            InputSlot(_slot_name(input_names, i, "in"), self, i) for i in range(num_inputs)
        ]
        self.outputs: list[OutputSlot] = [
            OutputSlot(_slot_name(output_names, i, "out"), self, i) for i in range(num_outputs)
        ]

    @property
    def num_regular_inputs(self) -> int:
        return self._num_regular_inputs

    @property
    def num_inputs(self) -> int:
        return len(self.inputs)

    @property
    def num_outputs(self) -> int:
        return len(self.outputs)

    def add_broadcast_input(self, name: str) -> InputSlot:
        if not self.supports_broadcast_inputs:
            raise ValueError(f"{self} does not accept broadcast inputs")
        slot = InputSlot(name, self, len(self.inputs), broadcast=True)
        self.inputs.append(slot)
        return slot

    def at(self, epoch: int) -> "Operator":
        self.epoch = epoch
        return self

    def with_name(self, name: str) -> "Operator":
        self.name = name
        return self

    def __repr__(self) -> str:
        return f"{self.kind}[{self.name}]" if self.name else self.kind


class LoopHeadOperator(Operator):
    """Operator that drives an iteration; its slots play named roles.

    Role lists hold slot indices. Roles may overlap.
    """

    is_loop_head = True

    def __init__(
        self,
        kind: str,
        input_names: Sequence[str],
        output_names: Sequence[str],
        initialization_inputs: Sequence[int],
        condition_inputs: Sequence[int],
        loop_body_inputs: Sequence[int],
        loop_body_outputs: Sequence[int],
        condition_outputs: Sequence[int],
        final_outputs: Sequence[int],
        num_expected_iterations: int,
        supports_broadcast_inputs: bool = False,
        name: str | None = None,
    ) -> None:
        super().__init__(
            kind,
            len(input_names),
            len(output_names),
            supports_broadcast_inputs=supports_broadcast_inputs,
            name=name,
            input_names=input_names,
            output_names=output_names,
        )
        self.num_expected_iterations = num_expected_iterations
        self._initialization_inputs = list(initialization_inputs)
        self._condition_inputs = list(condition_inputs)
        self._loop_body_inputs = list(loop_body_inputs)
        self._loop_body_outputs = list(loop_body_outputs)
        self._condition_outputs = list(condition_outputs)
        self._final_outputs = list(final_outputs)

        for role, indices, count in (
            ("initialization_inputs", self._initialization_inputs, self.num_inputs),
            ("condition_inputs", self._condition_inputs, self.num_inputs),
            ("loop_body_inputs", self._loop_body_inputs, self.num_inputs),
            ("loop_body_outputs", self._loop_body_outputs, self.num_outputs),
            ("condition_outputs", self._condition_outputs, self.num_outputs),
            ("final_outputs", self._final_outputs, self.num_outputs),
        ):
            invalid = [i for i in indices if not 0 <= i < count]
            if invalid:
                raise ValueError(f"{kind}: {role} has invalid slot indices {invalid} (slots={count})")

    @property
    def initialization_inputs(self) -> list[InputSlot]:
        return [self.inputs[i] for i in self._initialization_inputs]

    @property
    def condition_inputs(self) -> list[InputSlot]:
        return [self.inputs[i] for i in self._condition_inputs]

    @property
    def loop_body_inputs(self) -> list[InputSlot]:
        return [self.inputs[i] for i in self._loop_body_inputs]

    @property
    def loop_body_outputs(self) -> list[OutputSlot]:
        return [self.outputs[i] for i in self._loop_body_outputs]

    @property
    def condition_outputs(self) -> list[OutputSlot]:
        return [self.outputs[i] for i in self._condition_outputs]

    @property
    def final_outputs(self) -> list[OutputSlot]:
        return [self.outputs[i] for i in self._final_outputs]


def _slot_name(names: Sequence[str] | None, index: int, prefix: str) -> str:
    if names is not None and index < len(names):
        return names[index]
    return f"{prefix}{index}"
