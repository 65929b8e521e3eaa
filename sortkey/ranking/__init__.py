from sortkey.ranking.ranker import merge_sort, parse_limit, rank

__all__ = ["merge_sort", "parse_limit", "rank"]
