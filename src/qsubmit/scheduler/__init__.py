"""Slurm partition queries, job script rendering and submission."""

from .base import QueueDescriptor, Scheduler, SubmissionResult, select_queue
from .slurm import SlurmScheduler, parse_sinfo_output, parse_node_range
from .submit import submit_job_script, parse_job_id
from .templates import render_job_script, write_job_script

__all__ = [
    # Interface
    'QueueDescriptor',
    'Scheduler',
    'SubmissionResult',
    'select_queue',
    # Slurm
    'SlurmScheduler',
    'parse_sinfo_output',
    'parse_node_range',
    # Submission
    'submit_job_script',
    'parse_job_id',
    # Rendering
    'render_job_script',
    'write_job_script',
]
