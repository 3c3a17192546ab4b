from __future__ import annotations

from typing import Callable, Iterable

from pydantic import BaseModel, ConfigDict

from .operators import SyntheticOperator, wrap
from .plan import Operator
from .platform import SyntheticPlatform


ReplacementFactory = Callable[[Operator, int], SyntheticOperator]


class OperatorPattern(BaseModel):
    """Matches operators shaped like ``template``.

    An operator matches when it is the template itself, or when it has the
    template's exact class and kind and the same slot layout. Subclasses never match.
    """

    name: str
    template: Operator

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def matches(self, operator: Operator) -> bool:
        if operator is self.template:
            return True
        template = self.template
        return (
            type(operator) is type(template)
            and operator.kind == template.kind
            and operator.num_regular_inputs == template.num_regular_inputs
            and operator.num_outputs == template.num_outputs
        )


class SubplanPattern(BaseModel):
    operator_patterns: tuple[OperatorPattern, ...]

    model_config = ConfigDict(frozen=True)

    @classmethod
    def singleton(cls, pattern: OperatorPattern) -> "SubplanPattern":
        return cls(operator_patterns=(pattern,))

    def match(self, operator: Operator) -> Operator | None:
        if len(self.operator_patterns) != 1:
            raise NotImplementedError("only single-operator patterns are supported")
        return operator if self.operator_patterns[0].matches(operator) else None


class PlanTransformation(BaseModel):
    pattern: SubplanPattern
    replacement_factory: ReplacementFactory
    target_platform: SyntheticPlatform

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def apply(self, operator: Operator, epoch: int = 0) -> SyntheticOperator | None:
        match = self.pattern.match(operator)
        if match is None:
            return None
        return self.replacement_factory(match, epoch)


class SyntheticMapping(BaseModel):
    transformations: tuple[PlanTransformation, ...]

    model_config = ConfigDict(frozen=True)

    @property
    def transformation(self) -> PlanTransformation:
        return self.transformations[0]

    @property
    def template(self) -> Operator:
        return self.transformation.pattern.operator_patterns[0].template

    @property
    def target_platform(self) -> SyntheticPlatform:
        return self.transformation.target_platform


def build_mapping(source_operator: Operator, platform: SyntheticPlatform) -> SyntheticMapping:
    def replace(match: Operator, epoch: int) -> SyntheticOperator:
        return wrap(match, platform).at(epoch)

    pattern = SubplanPattern.singleton(OperatorPattern(name="original", template=source_operator))
    transformation = PlanTransformation(pattern=pattern, replacement_factory=replace, target_platform=platform)
    return SyntheticMapping(transformations=(transformation,))


def build_mappings_for_platform(operators: Iterable[Operator], platform: SyntheticPlatform) -> list[SyntheticMapping]:
    return [build_mapping(operator, platform) for operator in operators]
