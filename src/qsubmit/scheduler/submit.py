"""
Slurm job submission.

Hands a rendered job script to sbatch and reports sbatch's output verbatim.
"""

import re
import subprocess
from pathlib import Path
from typing import Optional, Tuple, Union

from ..errors import SubmissionError

_JOB_ID_PATTERN = re.compile(r'Submitted batch job (\d+)')


def submit_job_script(
    script_path: Union[str, Path],
    dry_run: bool = False,
) -> Tuple[Optional[str], str, str]:
    """
    Submit a job script with sbatch.

    sbatch runs from the script's directory so the job starts in the work
    directory. The script path is its only argument.

    Args:
        script_path: Path to the job script
        dry_run: If True, don't actually submit

    Returns:
        Tuple of (job_id, output, diagnostics): sbatch stdout and stderr,
        stripped. job_id is None if dry_run or if sbatch printed no
        recognizable job ID

    Raises:
        SubmissionError: If sbatch is missing or exits non-zero
    """
    script_path = Path(script_path)

    if dry_run:
        print(f"Dry run - not submitting {script_path}")
        return None, '', ''

    try:
        result = subprocess.run(
            ['sbatch', str(script_path)],
            cwd=str(script_path.parent),
            capture_output=True,
            text=True,
            check=True,
        )
    except FileNotFoundError:
        raise SubmissionError("sbatch not found on this system")
    except subprocess.CalledProcessError as e:
        message = (e.stderr or e.stdout or '').strip()
        raise SubmissionError(message or f"sbatch exited with status {e.returncode}")

    output = result.stdout.strip()
    return parse_job_id(output), output, (result.stderr or '').strip()


def parse_job_id(output: str) -> Optional[str]:
    """Extract the job ID from "Submitted batch job 12345"."""
    match = _JOB_ID_PATTERN.search(output)
    if match:
        return match.group(1)
    return None

