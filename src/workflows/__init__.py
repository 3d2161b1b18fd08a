"""
Workflows module - orchestration of source syncs.
"""
from workflows.base import Workflow
from workflows.sync_pipeline import SyncPipeline

__all__ = [
    "Workflow",
    "SyncPipeline",
]
