"""
Abstract scheduler interface.

Option resolution and submission only talk to the cluster through this
interface, so validation can run against an in-memory scheduler.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from ..errors import QueueNotFoundError
from ..walltime import format_limit


@dataclass(frozen=True)
class QueueDescriptor:
    """Limits advertised by one partition."""
    name: str
    min_nodes: int = 1
    max_nodes: Optional[int] = None      # None = unbounded
    max_walltime: Optional[int] = None   # seconds, None = unbounded
    default: bool = False

    @property
    def node_range(self) -> str:
        upper = 'infinite' if self.max_nodes is None else str(self.max_nodes)
        return f"{self.min_nodes}-{upper}"

    def describe(self) -> str:
        """One line for the interactive queue listing."""
        marker = ' (default)' if self.default else ''
        return (f"{self.name:<16} nodes {self.node_range:<12} "
                f"max time {format_limit(self.max_walltime)}{marker}")


def select_queue(name: str, queues: List[QueueDescriptor]) -> QueueDescriptor:
    """
    Pick a queue by name from the listed partitions.

    Raises:
        QueueNotFoundError: If no listed partition has that name
    """
    for queue in queues:
        if queue.name == name:
            return queue
    available = ', '.join(q.name for q in queues) or 'none'
    raise QueueNotFoundError(f"Unknown queue '{name}' (available: {available})")


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of handing a script to the scheduler."""
    job_id: Optional[str]
    output: str
    diagnostics: str = ''    # scheduler stderr, e.g. warnings on success


class Scheduler(ABC):
    """
    Narrow view of a workload manager.

    Subclasses must implement list_queues() and submit().
    """

    @abstractmethod
    def list_queues(self) -> List[QueueDescriptor]:
        """
        Query the partitions currently available.

        Returns:
            Queue descriptors in the scheduler's order
        """
        pass

    def get_queue(self, name: str) -> QueueDescriptor:
        """
        Look up node and time limits for one partition.

        Raises:
            QueueNotFoundError: If no partition has that name
        """
        return select_queue(name, self.list_queues())

    @abstractmethod
    def submit(self, script_path: Union[str, Path]) -> SubmissionResult:
        """
        Submit a job script.

        Args:
            script_path: Path to the rendered job script

        Returns:
            SubmissionResult with the scheduler's output verbatim
        """
        pass
