"""
Option resolution.

Turns CLI flags and/or interactive answers into a JobRequest that satisfies
the chosen partition's limits. Every gate fails fast with a ValidationError
naming the violated bound.

Resolution order:
    1. queue    - flag, or prompt after listing the partitions
    2. nodes    - forced to 1 on single-node partitions, else flag or prompt
    3. walltime - flag or prompt when the partition allows more than
                  30 minutes, else 30 minutes
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import click

from .errors import NodeCountError, WalltimeRangeError
from .path_utils import job_name, output_name
from .scheduler.base import QueueDescriptor, Scheduler, select_queue
from .walltime import MIN_WALLTIME, format_limit, format_walltime, parse_walltime

_NODE_PATTERN = re.compile(r'^[0-9]+$')


@dataclass(frozen=True)
class JobRequest:
    """A fully validated submission request."""
    input_file: str
    queue: str
    nodes: int
    walltime: str     # [D-]HH:MM:SS

    @property
    def job_name(self) -> str:
        return job_name(self.input_file)

    @property
    def output_name(self) -> str:
        return output_name(self.input_file)


class Prompter(ABC):
    """Source of interactive answers."""

    @abstractmethod
    def ask(self, label: str) -> str:
        pass

    def show(self, text: str) -> None:
        click.echo(text)


class ClickPrompter(Prompter):
    """Prompt on the terminal with click."""

    def ask(self, label: str) -> str:
        return click.prompt(label, type=str).strip()


# =============================================================================
# Individual gates
# =============================================================================

def validate_nodes(text: str, queue: QueueDescriptor) -> int:
    """
    Check a node count against the partition's [min, max].

    Args:
        text: Node count as typed; must be a plain integer literal
        queue: Partition limits (max_nodes None means unbounded)

    Returns:
        Node count as int

    Raises:
        NodeCountError: If text is not an integer or out of range
    """
    text = str(text).strip()
    if not _NODE_PATTERN.match(text):
        raise NodeCountError(f"Invalid node count '{text}': must be a non-negative integer")

    nodes = int(text)
    lower = max(queue.min_nodes, 1)
    if nodes < lower:
        raise NodeCountError(
            f"Node count {nodes} is below the minimum of {lower} "
            f"for queue '{queue.name}'"
        )
    if queue.max_nodes is not None and nodes > queue.max_nodes:
        raise NodeCountError(
            f"Node count {nodes} exceeds the maximum of {queue.max_nodes} "
            f"for queue '{queue.name}'"
        )
    return nodes


def validate_walltime(text: str, queue: QueueDescriptor) -> str:
    """
    Check a wall-clock time against [00:30:00, queue maximum].

    Returns:
        The time as given, without surrounding whitespace

    Raises:
        WalltimeFormatError: If text does not match [D-]HH:MM:SS
        WalltimeRangeError: If the time is outside the allowed range
    """
    seconds = parse_walltime(text)
    if seconds < MIN_WALLTIME:
        raise WalltimeRangeError(
            f"Time {text} is below the minimum of {format_walltime(MIN_WALLTIME)}"
        )
    if queue.max_walltime is not None and seconds > queue.max_walltime:
        raise WalltimeRangeError(
            f"Time {text} exceeds the maximum of {format_limit(queue.max_walltime)} "
            f"for queue '{queue.name}'"
        )
    return text.strip()


def allows_walltime_choice(queue: QueueDescriptor) -> bool:
    """True when the partition's limit exceeds the 30 minute floor."""
    return queue.max_walltime is None or queue.max_walltime > MIN_WALLTIME


# =============================================================================
# Full resolution
# =============================================================================

def _value_or_prompt(
    value: Optional[str],
    manual: bool,
    prompter: Prompter,
    label: str,
) -> str:
    if value is None or manual:
        return prompter.ask(label)
    return str(value)


def resolve_request(
    scheduler: Scheduler,
    input_file: str,
    queue: Optional[str] = None,
    nodes: Optional[str] = None,
    walltime: Optional[str] = None,
    manual: bool = False,
    prompter: Optional[Prompter] = None,
) -> JobRequest:
    """
    Resolve and validate a job request against live partition limits.

    Args:
        scheduler: Source of partition limits
        input_file: Input file name (already required by the caller)
        queue: Requested partition, or None to prompt
        nodes: Requested node count as given on the command line
        walltime: Requested time as [D-]HH:MM:SS
        manual: If True, prompt for every option and ignore the flags
        prompter: Interactive input source (default: terminal prompts)

    Returns:
        Validated JobRequest

    Raises:
        ValidationError: On the first option that fails its gate
    """
    if prompter is None:
        prompter = ClickPrompter()

    # Queue
    if queue is None or manual:
        queues = scheduler.list_queues()
        prompter.show("Available queues:")
        for q in queues:
            prompter.show(f"  {q.describe()}")
        selected = select_queue(prompter.ask("Queue"), queues)
    else:
        selected = scheduler.get_queue(queue)

    # Nodes
    if selected.max_nodes == 1:
        resolved_nodes = 1
    else:
        label = f"Number of nodes [{selected.node_range}]"
        resolved_nodes = validate_nodes(
            _value_or_prompt(nodes, manual, prompter, label), selected
        )

    # Wall-clock time
    if allows_walltime_choice(selected):
        label = (f"Wall-clock time [D-]HH:MM:SS "
                 f"[{format_walltime(MIN_WALLTIME)}-{format_limit(selected.max_walltime)}]")
        resolved_time = validate_walltime(
            _value_or_prompt(walltime, manual, prompter, label), selected
        )
    else:
        resolved_time = format_walltime(MIN_WALLTIME)

    return JobRequest(
        input_file=input_file,
        queue=selected.name,
        nodes=resolved_nodes,
        walltime=resolved_time,
    )
