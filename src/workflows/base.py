"""
Contains base class for workflows
"""
from abc import ABC, abstractmethod
from typing import List, Sequence

from core.entities import DataItem


class Workflow(ABC):
    """
    Orchestrates ingestion → processing for the caller's item collection.
    """

    name: str

    @abstractmethod
    async def run(self, items: Sequence[DataItem] = ()) -> List[DataItem]:
        """
        Execute the workflow and return a new item collection.
        The input collection is never mutated.
        Must never raise uncaught exceptions for source failures.
        """
        raise NotImplementedError
