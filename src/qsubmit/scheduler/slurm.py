"""
Slurm implementation of the scheduler interface.

Partition limits come from sinfo:

    sinfo --noheader --format "%P %s %l"

    debug* 1-8 1:00:00
    normal 1-infinite 2-00:00:00
    serial 1 7-00:00:00

%P is the partition name (a trailing '*' marks the default partition),
%s the job size range in nodes and %l the time limit.
"""

import subprocess
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .base import QueueDescriptor, Scheduler, SubmissionResult
from .submit import submit_job_script
from ..errors import SchedulerError
from ..walltime import parse_slurm_time

SINFO_FORMAT = '%P %s %l'


def parse_node_range(text: str) -> Tuple[int, Optional[int]]:
    """
    Parse a sinfo job size field.

    Examples:
        "1-8"        -> (1, 8)
        "1-infinite" -> (1, None)
        "4"          -> (4, 4)
    """
    text = text.strip()
    try:
        if '-' not in text:
            value = int(text)
            return value, value
        low, high = text.split('-', 1)
        if high.lower() in ('infinite', 'unlimited'):
            return int(low), None
        return int(low), int(high)
    except ValueError:
        raise SchedulerError(f"Unrecognized node range from sinfo: '{text}'")


def parse_sinfo_output(output: str) -> List[QueueDescriptor]:
    """
    Parse sinfo output produced with SINFO_FORMAT.

    Partitions listed more than once (one line per node state group) are
    reported once, keeping the first line.

    Returns:
        List of QueueDescriptor in sinfo order
    """
    queues = []
    seen = set()
    for line in output.strip().split('\n'):
        parts = line.split()
        if len(parts) < 3:
            continue

        name = parts[0]
        default = name.endswith('*')
        name = name.rstrip('*')
        if name in seen:
            continue
        seen.add(name)

        min_nodes, max_nodes = parse_node_range(parts[1])
        queues.append(QueueDescriptor(
            name=name,
            min_nodes=min_nodes,
            max_nodes=max_nodes,
            max_walltime=parse_slurm_time(parts[2]),
            default=default,
        ))
    return queues


class SlurmScheduler(Scheduler):
    """
    Query partitions with sinfo and submit with sbatch.

    Example:
        scheduler = SlurmScheduler()
        for queue in scheduler.list_queues():
            print(queue.describe())
    """

    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run

    def list_queues(self) -> List[QueueDescriptor]:
        try:
            result = subprocess.run(
                ['sinfo', '--noheader', '--format', SINFO_FORMAT],
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError:
            raise SchedulerError("sinfo not found on this system")
        except subprocess.CalledProcessError as e:
            message = (e.stderr or e.stdout or '').strip()
            raise SchedulerError(message or f"sinfo exited with status {e.returncode}")

        return parse_sinfo_output(result.stdout)

    def submit(self, script_path: Union[str, Path]) -> SubmissionResult:
        job_id, output, diagnostics = submit_job_script(script_path, dry_run=self.dry_run)
        return SubmissionResult(job_id=job_id, output=output, diagnostics=diagnostics)
