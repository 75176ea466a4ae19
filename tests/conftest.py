import asyncio
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"

for path in (REPO_ROOT, SRC_ROOT):
    path_str = str(path)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)


class CountingFetcher:
    """Async payload source that records how many times it was invoked."""

    def __init__(self, payload=None, error=None, gate=None):
        self.payload = payload
        self.error = error
        self.gate = gate
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture()
def scenario_payload():
    return {
        "day_stats": [
            {"day": 1, "players": [{"name": "Al", "rank": 1, "time": "0:50"}]},
            {"day": 2, "players": [{"name": "Bo", "rank": 1, "time": "1:00"}]},
        ]
    }


@pytest.fixture()
def search_payload():
    return {
        "day_stats": [
            {
                "day": 3,
                "players": [
                    {"name": "Ann", "rank": 2, "time": "1:30", "boxs": 2},
                    {"name": "Anna", "rank": 1, "time": "1:10"},
                    {"name": "Alice", "rank": 3, "time": "--:--"},
                ],
            },
            {
                "day": 1,
                "players": [
                    {"name": "ann ", "rank": 1, "time": "0:59", "boxs": "4"},
                    {"name": "Alan", "rank": 2, "time": "1:02"},
                ],
            },
            {
                "day": 2,
                "players": [
                    {"name": "Ann", "rank": 3, "time": "2:00"},
                    {"name": "Émile", "rank": 1, "time": "0:45"},
                ],
            },
        ]
    }


@pytest.fixture()
def counting_fetcher():
    return CountingFetcher
