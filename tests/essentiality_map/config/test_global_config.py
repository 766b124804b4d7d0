from __future__ import annotations

import json

import pytest

from essentiality_map.config.loader import load_global_config
from essentiality_map.config.model import DEFAULT_GENE_ID
from essentiality_map.core.exceptions import ConfigError


def _write_global(tmp_path, payload) -> None:
    (tmp_path / "global.json").write_text(json.dumps(payload))


def test_load_global_config_reads_values(tmp_path):
    _write_global(
        tmp_path,
        {
            "ui_title": "Essentiality",
            "api_url": "https://example.test/graphql",
            "default_gene_id": "ENSG00000141510",
            "request_timeout": 12,
        },
    )

    cfg = load_global_config(tmp_path)

    assert cfg.ui_title == "Essentiality"
    assert cfg.api_url == "https://example.test/graphql"
    assert cfg.default_gene_id == "ENSG00000141510"
    assert cfg.request_timeout == 12.0


def test_missing_keys_use_defaults(tmp_path):
    _write_global(tmp_path, {})

    cfg = load_global_config(tmp_path)

    assert cfg.default_gene_id == DEFAULT_GENE_ID
    assert cfg.api_url.startswith("https://")


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_global_config(tmp_path)


def test_invalid_json_raises_config_error(tmp_path):
    (tmp_path / "global.json").write_text("{not json")
    with pytest.raises(ConfigError):
        load_global_config(tmp_path)


@pytest.mark.parametrize(
    "payload",
    [
        {"request_timeout": 0},
        {"request_timeout": "fast"},
        {"default_gene_id": ""},
        {"api_url": 42},
    ],
)
def test_bad_values_raise_config_error(tmp_path, payload):
    _write_global(tmp_path, payload)
    with pytest.raises(ConfigError):
        load_global_config(tmp_path)
