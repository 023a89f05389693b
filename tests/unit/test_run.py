"""Tests for the market-lookup CLI."""

import asyncio
import json
import sys

from market_lookup import run
from market_lookup.config import EngineConfig


def run_cli(monkeypatch, tmp_path, *args: str) -> int:
    config_path = tmp_path / "missing-datasette.yaml"
    monkeypatch.setattr(sys, "argv", ["market-lookup", "--config", str(config_path), *args])
    return run.main()


class TestMain:
    """Test CLI modes."""

    def test_price(self, monkeypatch, tmp_path, capsys):
        assert run_cli(monkeypatch, tmp_path, "--price", "1.5b") == 0
        assert capsys.readouterr().out.strip() == "1.5e+09"

    def test_once(self, monkeypatch, tmp_path, catalog_path):
        assert run_cli(monkeypatch, tmp_path, "--source", str(catalog_path), "--once") == 0

    def test_once_failure(self, monkeypatch, tmp_path):
        assert run_cli(monkeypatch, tmp_path, "--source", str(tmp_path / "missing.json"), "--once") == 1

    def test_query_found(self, monkeypatch, tmp_path, catalog_path, capsys):
        assert run_cli(monkeypatch, tmp_path, "--source", str(catalog_path), "--query", "sword") == 0
        data = json.loads(capsys.readouterr().out)
        assert data["status"] == "found"
        assert data["item"]["name"] == "Diamond Sword"

    def test_query_not_found(self, monkeypatch, tmp_path, catalog_path, capsys):
        assert run_cli(monkeypatch, tmp_path, "--source", str(catalog_path), "--query", "unobtainium") == 1
        assert json.loads(capsys.readouterr().out)["status"] == "not_found"

    def test_list(self, monkeypatch, tmp_path, catalog_path, capsys):
        assert run_cli(monkeypatch, tmp_path, "--source", str(catalog_path), "--list") == 0
        assert "Page 1/1: Diamond | Diamond Sword | Emerald" in capsys.readouterr().out

    def test_no_mode_prints_help(self, monkeypatch, tmp_path, capsys):
        assert run_cli(monkeypatch, tmp_path) == 0
        assert "usage" in capsys.readouterr().out.lower()


class TestRunDaemon:
    """Test the reload daemon loop."""

    async def test_keeps_running_after_reload_error(self, monkeypatch, caplog):
        calls = []

        class FailingEngine:
            async def reload(self, source=None):
                calls.append(source)
                raise RuntimeError("boom")

        monkeypatch.setattr(run, "build_engine", lambda config: FailingEngine())
        task = asyncio.create_task(run.run_daemon(EngineConfig(reload_interval_seconds=0.01)))
        try:
            await asyncio.sleep(0.1)

            assert len(calls) >= 2
            assert not task.done()
            assert "Reload cycle failed" in caplog.text
        finally:
            task.cancel()
