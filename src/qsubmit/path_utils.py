"""
Naming conventions for the files and directories one submission produces.

Layout for input "water.inp" submitted by process 4242:

    <scratch-root>/water.inp.4242/           work directory
    <scratch-root>/water.inp.4242/water.inp  staged input
    <scratch-root>/water.inp.4242/water.job.4242  job script
    <scratch-root>/water.inp.4242/water.out  computation output (written by the job)
"""

from pathlib import Path
from typing import Union


def job_name(input_file: Union[str, Path]) -> str:
    """Input name without its extension ("water.inp" -> "water")."""
    return Path(input_file).stem


def output_name(input_file: Union[str, Path]) -> str:
    return f"{job_name(input_file)}.out"


def job_script_name(input_file: Union[str, Path], pid: int) -> str:
    return f"{job_name(input_file)}.job.{pid}"


def work_dir_name(input_file: Union[str, Path], pid: int) -> str:
    return f"{Path(input_file).name}.{pid}"


def build_work_dir(scratch_root: Union[str, Path], input_file: Union[str, Path], pid: int) -> Path:
    """
    Build the work directory path for one submission.

    Uniqueness rests on the (input name, pid) pair.

    Args:
        scratch_root: Root of the scratch filesystem
        input_file: Input file name (only its basename is used)
        pid: Process identifier of the submitting process

    Returns:
        Path to <scratch_root>/<input-name>.<pid>
    """
    return Path(scratch_root) / work_dir_name(input_file, pid)


def with_default_extension(input_file: str, extension: str) -> str:
    """Append the default extension when the name has none ("water" -> "water.inp")."""
    if Path(input_file).suffix:
        return input_file
    if extension and not extension.startswith('.'):
        extension = '.' + extension
    return input_file + extension
