from sortkey.fetchers.orchestrator import aggregate

__all__ = ["aggregate"]
