"""Shared fixtures: an in-memory scheduler and scripted prompts."""

from pathlib import Path
from typing import List

import pytest

from qsubmit.options import Prompter
from qsubmit.scheduler.base import QueueDescriptor, Scheduler, SubmissionResult


class FakeScheduler(Scheduler):
    """Scheduler with fixed partitions that records submissions."""

    def __init__(self, queues: List[QueueDescriptor]):
        self.queues = list(queues)
        self.submitted: List[Path] = []
        self.list_calls = 0

    def list_queues(self):
        self.list_calls += 1
        return list(self.queues)

    def submit(self, script_path):
        self.submitted.append(Path(script_path))
        job_id = str(1000 + len(self.submitted))
        return SubmissionResult(job_id=job_id, output=f"Submitted batch job {job_id}")


class ScriptedPrompter(Prompter):
    """Answers prompts from a fixed list and records what was shown."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.labels = []
        self.shown = []

    def ask(self, label):
        self.labels.append(label)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {label}")
        return self.answers.pop(0)

    def show(self, text):
        self.shown.append(text)


@pytest.fixture
def queues():
    return [
        QueueDescriptor(name='debug', min_nodes=1, max_nodes=8, max_walltime=3600, default=True),
        QueueDescriptor(name='normal', min_nodes=1, max_nodes=None, max_walltime=2 * 86400),
        QueueDescriptor(name='serial', min_nodes=1, max_nodes=1, max_walltime=7 * 86400),
        QueueDescriptor(name='short', min_nodes=1, max_nodes=4, max_walltime=1800),
    ]


@pytest.fixture
def scheduler(queues):
    return FakeScheduler(queues)
