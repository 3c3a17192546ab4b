from pathlib import Path

import pytest

from synthetic_platforms.config import Configuration, HarnessConfig
from synthetic_platforms.io import load_harness_config


def test_harness_yaml_missing_required_field(tmp_path: Path) -> None:
    path = tmp_path / "harness.yaml"
    path.write_text("ccg_density: 0.2\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid harness config"):
        HarnessConfig.from_yaml(path)


def test_harness_density_out_of_range(tmp_path: Path) -> None:
    path = tmp_path / "harness.yaml"
    path.write_text("num_platforms: 2\nccg_density: 1.5\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid harness config"):
        HarnessConfig.from_yaml(path)


def test_unknown_operator_rejected() -> None:
    with pytest.raises(ValueError, match="unknown operators: teleport"):
        HarnessConfig(num_platforms=1, operators=["map", "teleport"])


def test_nested_properties_are_flattened(tmp_path: Path) -> None:
    path = tmp_path / "harness.yaml"
    path.write_text(
        """
num_platforms: 1
properties:
  synthetic:
    synthetic-0:
      cpu:
        mhz: 1500
      hdfs:
        ms-per-mb: 20.5
""".lstrip(),
        encoding="utf-8",
    )
    configuration = HarnessConfig.from_yaml(path).configuration
    assert configuration.get_long_property("synthetic.synthetic-0.cpu.mhz", 3000) == 1500
    assert configuration.get_double_property("synthetic.synthetic-0.hdfs.ms-per-mb", 100) == pytest.approx(20.5)


def test_missing_properties_fall_back_to_defaults() -> None:
    configuration = Configuration()
    assert configuration.get_long_property("synthetic.synthetic-9.cpu.cores", 1) == 1
    assert configuration.get_double_property("synthetic.synthetic-9.stretch", 1.0) == 1.0
    updated = configuration.with_properties(**{"synthetic.synthetic-9.stretch": 2.0})
    assert updated.get_double_property("synthetic.synthetic-9.stretch", 1.0) == 2.0
    assert configuration.properties == {}


def test_configuration_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "configuration.yaml"
    path.write_text("synthetic:\n  synthetic-2:\n    costs:\n      fix: 4\n", encoding="utf-8")
    configuration = Configuration.from_yaml(path)
    assert configuration.get_double_property("synthetic.synthetic-2.costs.fix", 0.0) == 4.0


def test_load_json_config(tmp_path: Path) -> None:
    path = tmp_path / "harness.json"
    path.write_text('{"num_platforms": 3, "ccg_density": 0.25, "seed": 1}', encoding="utf-8")
    config = load_harness_config(path)
    assert config.num_platforms == 3
    assert config.operators is None


def test_load_unsupported_format(tmp_path: Path) -> None:
    path = tmp_path / "harness.toml"
    path.write_text("num_platforms = 1\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported config format"):
        load_harness_config(path)


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_harness_config(tmp_path / "absent.yaml")


def test_fractional_integer_property_rejected() -> None:
    configuration = Configuration(properties={"synthetic.synthetic-0.cpu.cores": 2.5})
    with pytest.raises(ValueError, match="not an integer"):
        configuration.get_long_property("synthetic.synthetic-0.cpu.cores", 1)


def test_integral_float_property_accepted() -> None:
    configuration = Configuration(properties={"synthetic.synthetic-0.cpu.mhz": 2000.0})
    assert configuration.get_long_property("synthetic.synthetic-0.cpu.mhz", 3000) == 2000
