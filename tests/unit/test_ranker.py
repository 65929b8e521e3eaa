import random

from sortkey.errors import RankingError
from sortkey.models import SortKey, UrlStat
from sortkey.ranking.ranker import (
    NO_LIMIT,
    limit_results,
    merge_sort,
    parse_limit,
    rank,
)


def _records():
    return [
        UrlStat(url="www.example.com/abc1", views=1000, relevance_score=0.5),
        UrlStat(url="www.example.com/abc2", views=2000, relevance_score=0.4),
        UrlStat(url="www.example.com/abc3", views=3000, relevance_score=0.2),
        UrlStat(url="www.example.com/abc4", views=4000, relevance_score=0.3),
        UrlStat(url="www.example.com/abc5", views=5000, relevance_score=0.1),
    ]


def _random_records(count, seed):
    rng = random.Random(seed)
    return [
        UrlStat(
            url=f"www.example.com/{i}",
            views=rng.randint(0, 50),
            relevance_score=rng.choice([0.0, 0.1, 0.25, 0.5, 0.75, 1.0]),
        )
        for i in range(count)
    ]


def _urls(records):
    return [r.url.rsplit("/", 1)[-1] for r in records]


class TestMergeSort:
    def test_sort_by_views(self):
        shuffled = list(reversed(_records()))
        assert _urls(merge_sort(shuffled, SortKey.VIEWS)) == [
            "abc1", "abc2", "abc3", "abc4", "abc5",
        ]

    def test_sort_by_relevance_score(self):
        assert _urls(merge_sort(_records(), "relevanceScore")) == [
            "abc5", "abc3", "abc4", "abc2", "abc1",
        ]

    def test_unknown_key_sorts_by_relevance_score(self):
        expected = merge_sort(_records(), SortKey.RELEVANCE_SCORE)
        for key in ("", None, "unsupported", "url"):
            assert merge_sort(_records(), key) == expected

    def test_empty_and_single(self):
        assert merge_sort([], "views") == []
        single = [UrlStat(url="a")]
        assert merge_sort(single, "views") == single

    def test_input_not_mutated(self):
        records = list(reversed(_records()))
        before = list(records)
        merge_sort(records, "views")
        assert records == before

    def test_accepts_tuples(self):
        assert len(merge_sort(tuple(_records()), "views")) == 5

    def test_missing_values_sort_as_zero(self):
        records = [UrlStat(url="a", views=10), UrlStat(url="b")]
        assert _urls(merge_sort(records, "views")) == ["b", "a"]

    def test_equal_keys_keep_input_order(self):
        records = [UrlStat(url=f"www.example.com/{i}", views=7) for i in range(9)]
        assert merge_sort(records, "views") == records

    def test_matches_builtin_sort_on_random_input(self):
        for seed in range(20):
            records = _random_records(seed * 3 + 1, seed)
            for key, attr in (("views", "views"), ("relevanceScore", "relevance_score")):
                result = merge_sort(records, key)
                assert result == sorted(records, key=lambda r: getattr(r, attr))


class TestParseLimit:
    def test_valid(self):
        assert parse_limit("3") == 3
        assert parse_limit(3) == 3

    def test_invalid_means_no_limit(self):
        for raw in (None, "", "abc", "0", "-2", "2.5", 0, -1, True):
            assert parse_limit(raw) == NO_LIMIT


class TestLimitResults:
    def test_truncates(self):
        assert limit_results(_records(), 2) == _records()[:2]

    def test_no_limit_or_too_large(self):
        for limit in (NO_LIMIT, 0, 5, 6, 100):
            assert limit_results(_records(), limit) == _records()


class TestRank:
    def test_example_views(self):
        records = [
            UrlStat(url="a", views=1000, relevance_score=0.5),
            UrlStat(url="b", views=5000, relevance_score=0.1),
        ]
        assert [r.url for r in rank(records, "views", -1)] == ["a", "b"]
        assert [r.url for r in rank(records, "relevanceScore", -1)] == ["b", "a"]
        assert [r.url for r in rank(records, "views", 1)] == ["a"]

    def test_full_result_is_sorted_permutation(self):
        records = _random_records(40, 7)
        ranked = rank(records, "views", NO_LIMIT)
        assert len(ranked) == len(records)
        assert sorted(ranked, key=lambda r: r.url) == sorted(records, key=lambda r: r.url)
        views = [r.views for r in ranked]
        assert views == sorted(views)

    def test_idempotent(self):
        records = _random_records(33, 3)
        for key in ("views", "relevanceScore", "bogus"):
            once = rank(records, key, NO_LIMIT)
            assert rank(once, key, NO_LIMIT) == once

    def test_limit_is_prefix_of_full_sort(self):
        records = _random_records(25, 11)
        full = rank(records, "relevanceScore", NO_LIMIT)
        for limit in range(1, 25):
            assert rank(records, "relevanceScore", limit) == full[:limit]

    def test_out_of_range_limit_returns_everything(self):
        records = _random_records(10, 5)
        full = rank(records, "views", NO_LIMIT)
        for limit in (0, -5, 10, 11):
            assert rank(records, "views", limit) == full

    def test_none_collection(self):
        try:
            rank(None, "views")
            assert False, "Should have raised RankingError"
        except RankingError:
            pass
