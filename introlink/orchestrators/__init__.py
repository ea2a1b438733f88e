"""Orchestrators: coordination of metered backend calls."""

from introlink.orchestrators.search import SearchOrchestrator

__all__ = ["SearchOrchestrator"]
