from introlink.orchestrators.search.backends.http import HttpSearchBackend

__all__ = ["HttpSearchBackend"]
