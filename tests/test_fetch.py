import json
from pathlib import Path

import pytest
import requests

from day_stats import fetch as fetch_module
from day_stats.classes.errors import FormatError, NetworkError
from day_stats.classes.session import DayStatsSession
from day_stats.config import DayStatsSettings

REPO_ROOT = Path(__file__).resolve().parents[1]


class FakeResponse:
    def __init__(self, status_code=200, payload=None, bad_json=False):
        self.status_code = status_code
        self.ok = 200 <= status_code < 400
        self._payload = payload
        self._bad_json = bad_json

    def json(self):
        if self._bad_json:
            raise ValueError("no json")
        return self._payload


def test_requests_fetch_json_returns_payload(monkeypatch):
    captured = {}

    def fake_get(url, headers=None, timeout=None):
        captured.update(url=url, headers=headers, timeout=timeout)
        return FakeResponse(payload={"day_stats": []})

    monkeypatch.setattr(fetch_module.requests, "get", fake_get)

    payload = fetch_module.requests_fetch_json("https://example.com/d.json", {"A": "1"}, 7)

    assert payload == {"day_stats": []}
    assert captured == {"url": "https://example.com/d.json", "headers": {"A": "1"}, "timeout": 7}


def test_requests_fetch_json_maps_status_to_network_error(monkeypatch):
    monkeypatch.setattr(fetch_module.requests, "get", lambda *_a, **_k: FakeResponse(status_code=404))

    with pytest.raises(NetworkError) as excinfo:
        fetch_module.requests_fetch_json("https://example.com/d.json", {}, 5)

    assert excinfo.value.status_code == 404
    assert "404" in str(excinfo.value)


def test_requests_fetch_json_maps_transport_failure(monkeypatch):
    def boom(*_a, **_k):
        raise requests.ConnectionError("down")

    monkeypatch.setattr(fetch_module.requests, "get", boom)

    with pytest.raises(NetworkError) as excinfo:
        fetch_module.requests_fetch_json("https://example.com/d.json", {}, 5)

    assert excinfo.value.status_code is None


def test_requests_fetch_json_maps_bad_json_to_format_error(monkeypatch):
    monkeypatch.setattr(fetch_module.requests, "get", lambda *_a, **_k: FakeResponse(bad_json=True))

    with pytest.raises(FormatError):
        fetch_module.requests_fetch_json("https://example.com/d.json", {}, 5)


def test_file_fetch_json(tmp_path):
    path = tmp_path / "day_stats.json"
    path.write_text(json.dumps({"day_stats": [{"day": 1, "players": []}]}), encoding="utf-8")
    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")

    assert fetch_module.file_fetch_json(path)["day_stats"][0]["day"] == 1
    with pytest.raises(FormatError):
        fetch_module.file_fetch_json(broken)
    with pytest.raises(NetworkError):
        fetch_module.file_fetch_json(tmp_path / "missing.json")


def test_fetch_day_stats_payload_uses_injected_fetch_json_for_urls():
    captured = {}

    def fake_fetch_json(url, headers, timeout):
        captured.update(url=url, headers=headers, timeout=timeout)
        return {"day_stats": []}

    fetch_module.fetch_day_stats_payload("https://example.com/d.json", fetch_json=fake_fetch_json, timeout=3)

    assert captured["headers"] is fetch_module.DEFAULT_HEADERS
    assert captured["timeout"] == 3


@pytest.mark.asyncio
async def test_make_source_fetcher_runs_configured_source(tmp_path):
    path = tmp_path / "day_stats.json"
    path.write_text(json.dumps({"day_stats": [{"day": 4, "players": []}]}), encoding="utf-8")

    fetcher = fetch_module.make_source_fetcher(DayStatsSettings(data_url=str(path)))

    assert (await fetcher())["day_stats"][0]["day"] == 4


@pytest.mark.asyncio
async def test_default_source_loads_from_any_working_directory(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)

    days = await DayStatsSession.from_settings(DayStatsSettings()).load()

    assert [day.day_number for day in days] == [2, 1]


def test_relative_file_source_is_read_from_project_root(monkeypatch, tmp_path):
    read = []
    monkeypatch.setattr(fetch_module, "file_fetch_json", lambda path: read.append(path) or {})
    monkeypatch.chdir(tmp_path)

    fetch_module.fetch_day_stats_payload("data/day_stats.json")

    assert read == [str(REPO_ROOT / "data" / "day_stats.json")]
