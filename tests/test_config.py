from pathlib import Path

import pytest

from pending_payments.config import ConfigError, apply_cli_overrides, load_config, load_token


def test_apply_cli_overrides_ignores_nested_none_values() -> None:
    cfg = load_config(None)
    merged = apply_cli_overrides(
        cfg,
        {
            "project": {"org": None, "number": 7},
            "output": {"csv_path": None},
        },
    )
    assert merged["project"]["org"] == "NautilusOSS"
    assert merged["project"]["number"] == 7
    assert merged["output"]["csv_path"] == "pending_payment_tasks.csv"


def test_load_config_merges_yaml_over_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("project:\n  org: ExampleOrg\nclassify:\n  bounty_symbol: USDC\n", encoding="utf-8")
    cfg = load_config(path)
    assert cfg["project"]["org"] == "ExampleOrg"
    assert cfg["project"]["number"] == 2
    assert cfg["classify"]["bounty_symbol"] == "USDC"
    assert cfg["classify"]["status_name"] == "Pending Payment"


def test_load_config_rejects_missing_file_and_non_mapping(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yaml")
    bad = tmp_path / "bad.yaml"
    bad.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(bad)


def test_load_token_reads_configured_variable() -> None:
    cfg = load_config(None)
    assert load_token(cfg, {"GITHUB_TOKEN": "abc"}) == "abc"
    cfg["github"]["token_env"] = "PROJECT_TOKEN"
    assert load_token(cfg, {"PROJECT_TOKEN": " xyz "}) == "xyz"


def test_load_token_missing_or_blank_is_config_error() -> None:
    cfg = load_config(None)
    with pytest.raises(ConfigError, match="GITHUB_TOKEN"):
        load_token(cfg, {})
    with pytest.raises(ConfigError):
        load_token(cfg, {"GITHUB_TOKEN": "   "})
