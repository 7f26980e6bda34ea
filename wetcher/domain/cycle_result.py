"""Crawl cycle result data model."""
from typing import NamedTuple


class CycleResult(NamedTuple):
    """Summary of one polling cycle of a job.

    Lets the scheduler log what happened without inspecting driver state.
    """
    resources_visited: int
    """Number of resources fetched, parsed and evaluated"""

    resources_failed: int
    """Number of resources whose fetch, parse or processing failed"""

    continuations_followed: int
    """Number of continuation resources pushed onto the queue"""
