import json
from pathlib import Path

from synthetic_platforms.cli import main


REPO_ROOT = Path(__file__).resolve().parents[1]


def test_cli_runs_on_examples(capsys) -> None:
    rc = main(["--config", str(REPO_ROOT / "examples" / "harness.yaml")])
    assert rc == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["num_platforms"] == 5
    assert payload["num_channels"] == 16
    assert payload["num_conversions"] == 72
    assert payload["num_mappings"] == 5 * 28
    assert len(payload["mapped_operators"]) == 28
    assert len(payload["platforms"]) == 5

    platform0 = payload["platforms"][0]
    assert platform0["configuration_name"] == "synthetic-0"
    assert platform0["cost_model"]["cpu_ms_per_cycle"] == 1 / (4 * 2000 * 1000)
    assert platform0["cost_model"]["fix_costs"] == 10
    assert payload["platforms"][1]["cost_model"]["stretch"] == 2.5

    hdfs_reads = [c for c in payload["conversions"] if c["operator"] == "Read non-reusable from HDFS"]
    assert len(hdfs_reads) == 5


def test_cli_overrides_and_output_file(tmp_path: Path) -> None:
    out = tmp_path / "report" / "harness.json"
    rc = main(
        [
            "--config",
            str(REPO_ROOT / "examples" / "harness.json"),
            "--platforms",
            "3",
            "--seed",
            "9",
            "--output",
            str(out),
        ]
    )
    assert rc == 0
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["num_platforms"] == 3
    assert payload["num_conversions"] == 15
    assert payload["mapped_operators"] == ["map", "filter", "do-while"]


def test_cli_reports_unsatisfiable_density(capsys) -> None:
    rc = main(["--config", str(REPO_ROOT / "examples" / "harness.json"), "--density", "1.0"])
    assert rc == 2
    assert "error:" in capsys.readouterr().err
