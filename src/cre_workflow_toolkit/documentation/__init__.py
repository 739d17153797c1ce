"""Platform documentation helpers."""

from cre_workflow_toolkit.documentation.fetcher import DocsFetcher, DocsFetchResult

__all__ = ["DocsFetchResult", "DocsFetcher"]
