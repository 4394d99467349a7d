# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError
from site_mirror.config import CrawlerConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("seed_url: http://example.com\nconcurrency: 4", ".yaml", None),
        (json.dumps({"seed_url": "http://example.com", "concurrency": 4}), ".json", None),
        ("seed_url: http://example.com\nmax_depth: 3", ".yaml", ValidationError),
        ("seed_url: not a url", ".yaml", ValidationError),
        ("seed_url: http://example.com\nconcurrency: 0", ".yaml", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- just\n- a list", ".yaml", TypeError),
        ("{broken json", ".json", ValueError),
        ("seed_url = 'http://example.com'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlerConfig)
        assert cfg.seed == "http://example.com/"
        assert cfg.concurrency == 4


def test_defaults_without_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = load_config(None)
    assert cfg.seed == "https://nearceleb.com/"
    assert cfg.host == "nearceleb.com"
    assert cfg.scheme == "https"
    assert cfg.output_dir == Path("static")
    assert cfg.timeout is None


def test_default_config_file_is_picked_up(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text(
        "seed_url: http://mirror.test\noutput_dir: out", encoding="utf-8"
    )
    cfg = load_config(None)
    assert cfg.host == "mirror.test"
    assert cfg.output_dir == Path("out")


def test_explicit_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "params,host",
    [
        ({"seed_url": "http://Example.COM/start"}, "example.com"),
        ({"seed_url": "http://127.0.0.1:8080"}, "127.0.0.1:8080"),
        ({"seed_url": "https://nearceleb.com", "target_host": " Ghost.NearCeleb.com "}, "ghost.nearceleb.com"),
        ({"seed_url": "https://nearceleb.com", "target_host": ""}, "nearceleb.com"),
    ],
)
def test_host_resolution(params, host):
    assert CrawlerConfig(**params).host == host


def test_config_is_frozen():
    cfg = CrawlerConfig()
    with pytest.raises(ValidationError):
        cfg.concurrency = 2
