import pytest

from day_stats.classes.dataset_cache import DatasetCache, parse_day_stats
from day_stats.classes.search_index import PlayerRecord, SearchIndexBuilder, build_search_index
from day_stats.classes.search_resolver import PlayerSearch, SearchStatus, resolve


@pytest.fixture()
def index(search_payload):
    days, _ = parse_day_stats(search_payload)
    return build_search_index(days)


@pytest.mark.parametrize("query", ["", "   ", None])
def test_empty_query_is_empty_regardless_of_index(index, query):
    assert resolve(index, query).status is SearchStatus.EMPTY
    assert resolve(None, query).status is SearchStatus.EMPTY


def test_exact_match_beats_substring(index):
    result = resolve(index, "ann")

    assert result.found
    assert result.entry.canonical_name == "Ann"


def test_exact_match_is_trimmed_and_case_insensitive(index):
    assert resolve(index, "  ANNA ").entry.canonical_name == "Anna"


def test_ambiguous_substring_is_not_found(index):
    result = resolve(index, "al")

    assert result.status is SearchStatus.NOT_FOUND
    assert result.entry is None


@pytest.mark.parametrize("query, expected", [("nna", "Anna"), ("ali", "Alice"), ("mile", "Émile")])
def test_unique_substring_is_found(index, query, expected):
    assert resolve(index, query).entry.canonical_name == expected


def test_single_character_without_exact_match_is_not_found(index):
    assert resolve(index, "n").status is SearchStatus.NOT_FOUND


def test_missing_index_is_not_found():
    assert resolve(None, "ann").status is SearchStatus.NOT_FOUND


def test_scenario_b_records(scenario_payload):
    days, _ = parse_day_stats(scenario_payload)

    result = resolve(build_search_index(days), "bo")

    assert result.found
    assert result.entry.records == [PlayerRecord(day=2, rank=1, time="1:00", seconds=60.0)]


@pytest.mark.asyncio
async def test_player_search_builds_index_on_first_query(counting_fetcher, search_payload):
    cache = DatasetCache(counting_fetcher(payload=search_payload))
    builder = SearchIndexBuilder(cache)
    search = PlayerSearch(builder, sort_field="time", sort_order="asc")
    await cache.fetch_and_cache()

    outcome = search.search("Ann")

    assert outcome.result.found
    assert builder.build_count == 1
    assert search.current_player.canonical_name == "Ann"
    assert [record.day for record in search.sorted_records()] == [1, 3, 2]
    assert [record.day for record in search.set_sort("day", "desc")] == [3, 2, 1]


@pytest.mark.asyncio
async def test_player_search_live_miss_is_silent(counting_fetcher, search_payload):
    cache = DatasetCache(counting_fetcher(payload=search_payload))
    search = PlayerSearch(SearchIndexBuilder(cache))
    await cache.fetch_and_cache()
    search.search("Ann")

    live = search.search("al", live=True)
    committed = search.search("al")

    assert live.silent
    assert not committed.silent
    assert search.current_player is None
    assert search.sorted_records() == []


def test_player_search_before_dataset_is_not_found(counting_fetcher):
    search = PlayerSearch(SearchIndexBuilder(DatasetCache(counting_fetcher())))

    assert search.search("ann").result.status is SearchStatus.NOT_FOUND
    assert search.search("").result.status is SearchStatus.EMPTY
