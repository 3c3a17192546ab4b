"""Representative logical operators used as mapping templates."""

from __future__ import annotations

from typing import Iterable

from .plan import LoopHeadOperator, Operator


EXPECTED_ITERATIONS = 20

# kind -> (input names, output names, accepts broadcast inputs)
_PLAIN_SHAPES: dict[str, tuple[tuple[str, ...], tuple[str, ...], bool]] = {
    "cartesian": (("input0", "input1"), ("output",), False),
    "co-group": (("input0", "input1"), ("output",), True),
    "collection-source": ((), ("output",), False),
    "count": (("input",), ("output",), False),
    "distinct": (("input",), ("output",), False),
    "filter": (("input",), ("output",), True),
    "flat-map": (("input",), ("output",), True),
    "global-materialized-group": (("input",), ("output",), False),
    "global-reduce": (("input",), ("output",), True),
    "group-by": (("input",), ("output",), True),
    "intersect": (("input0", "input1"), ("output",), False),
    "join": (("input0", "input1"), ("output",), True),
    "local-callback-sink": (("input",), (), True),
    "map": (("input",), ("output",), True),
    "map-partitions": (("input",), ("output",), True),
    "materialized-group-by": (("input",), ("output",), True),
    "reduce-by": (("input",), ("output",), True),
    "reduce": (("input",), ("output",), True),
    "sample": (("input",), ("output",), True),
    "sort": (("input",), ("output",), True),
    "table-source": ((), ("output",), False),
    "text-file-sink": (("input",), (), False),
    "text-file-source": ((), ("output",), False),
    "union-all": (("input0", "input1"), ("output",), False),
    "zip-with-id": (("input",), ("output",), False),
}


def _do_while() -> LoopHeadOperator:
    return LoopHeadOperator(
        "do-while",
        input_names=("initIn", "iterIn", "convergenceIn"),
        output_names=("iterOut", "finOut"),
        initialization_inputs=[0],
        condition_inputs=[2],
        loop_body_inputs=[1],
        loop_body_outputs=[0],
        condition_outputs=[0],
        final_outputs=[1],
        num_expected_iterations=EXPECTED_ITERATIONS,
        supports_broadcast_inputs=True,
    )


def _loop() -> LoopHeadOperator:
    return LoopHeadOperator(
        "loop",
        input_names=("initIn", "initConvergenceIn", "iterIn", "convergenceIn"),
        output_names=("iterOut", "convergenceOut", "finOut"),
        initialization_inputs=[0, 1],
        condition_inputs=[1, 3],
        loop_body_inputs=[2],
        loop_body_outputs=[0],
        condition_outputs=[1],
        final_outputs=[2],
        num_expected_iterations=EXPECTED_ITERATIONS,
        supports_broadcast_inputs=True,
    )


def _repeat() -> LoopHeadOperator:
    return LoopHeadOperator(
        "repeat",
        input_names=("initIn", "iterIn"),
        output_names=("iterOut", "finOut"),
        initialization_inputs=[0],
        condition_inputs=[],
        loop_body_inputs=[1],
        loop_body_outputs=[0],
        condition_outputs=[],
        final_outputs=[1],
        num_expected_iterations=EXPECTED_ITERATIONS,
    )


_LOOP_HEADS = {"do-while": _do_while, "loop": _loop, "repeat": _repeat}


def catalog_kinds() -> list[str]:
    return sorted([*_PLAIN_SHAPES, *_LOOP_HEADS])


def create_operator(kind: str) -> Operator:
    if kind in _LOOP_HEADS:
        return _LOOP_HEADS[kind]()
    try:
        inputs, outputs, broadcast = _PLAIN_SHAPES[kind]
    except KeyError:
        raise KeyError(f"Unknown operator kind: {kind}") from None
    return Operator(
        kind,
        len(inputs),
        len(outputs),
        supports_broadcast_inputs=broadcast,
        input_names=inputs,
        output_names=outputs,
    )


def default_operator_catalog() -> list[Operator]:
    """Fresh templates for every known operator kind, in alphabetical order."""
    return [create_operator(kind) for kind in catalog_kinds()]


def select_operators(kinds: Iterable[str]) -> list[Operator]:
    return [create_operator(kind) for kind in kinds]
