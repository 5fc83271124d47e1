from .adapter import HttpAdapter, RequestsAdapter

__all__ = ["HttpAdapter", "RequestsAdapter"]
