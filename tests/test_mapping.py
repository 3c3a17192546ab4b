from synthetic_platforms.catalog import create_operator, default_operator_catalog
from synthetic_platforms.mapping import build_mapping, build_mappings_for_platform
from synthetic_platforms.operators import SyntheticLoopHeadOperator, SyntheticOperator
from synthetic_platforms.plan import Operator
from synthetic_platforms.platform import SyntheticPlatform


def test_mapping_replaces_template_with_synthetic_operator() -> None:
    platform = SyntheticPlatform(1)
    template = create_operator("map")
    mapping = build_mapping(template, platform)

    assert len(mapping.transformations) == 1
    assert mapping.template is template
    assert mapping.target_platform is platform

    replacement = mapping.transformation.apply(template, epoch=4)
    assert isinstance(replacement, SyntheticOperator)
    assert not isinstance(replacement, SyntheticLoopHeadOperator)
    assert replacement.platform is platform
    assert replacement.epoch == 4


def test_mapping_dispatches_on_loop_heads() -> None:
    platform = SyntheticPlatform(0)
    template = create_operator("do-while")
    replacement = build_mapping(template, platform).transformation.apply(template)
    assert isinstance(replacement, SyntheticLoopHeadOperator)
    assert replacement.num_expected_iterations == 20


def test_pattern_matches_only_same_kind() -> None:
    platform = SyntheticPlatform(0)
    transformation = build_mapping(create_operator("map"), platform).transformation

    assert transformation.apply(create_operator("map")) is not None
    assert transformation.apply(create_operator("filter")) is None
    assert transformation.apply(Operator("map", 2, 1)) is None


def test_mappings_for_platform_cover_the_catalog() -> None:
    platform = SyntheticPlatform(0)
    catalog = default_operator_catalog()
    mappings = build_mappings_for_platform(catalog, platform)

    assert len(catalog) == 28
    assert len(mappings) == len(catalog)
    assert [m.template for m in mappings] == catalog
    assert all(m.target_platform is platform for m in mappings)
    assert len(set(mappings)) == len(mappings)
