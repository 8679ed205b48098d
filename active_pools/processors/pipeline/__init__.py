"""
Snapshot pipeline orchestration and command-line entry point.
"""

from .active_pools_pipeline import ActivePoolsPipeline

__all__ = ['ActivePoolsPipeline']
