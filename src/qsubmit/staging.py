"""
Workspace staging.

Creates the per-submission work directory on scratch and copies in the
input file plus every restart file the input references.

Restart references are lines of the form

    restart  previous.chk
    RESTART = previous.chk

where the keyword is one of the configured restart keywords (matched
case-insensitively) and the first token after it is the file name.
"""

import re
import shutil
from pathlib import Path
from typing import Iterable, List, Union

from .errors import StagingError
from .path_utils import build_work_dir

_COMMENT_PREFIXES = ('#', '!')


def _reference_pattern(keywords: Iterable[str]) -> re.Pattern:
    alternatives = '|'.join(re.escape(k) for k in keywords)
    return re.compile(rf'^\s*(?:{alternatives})\s*(?:=\s*|\s)\s*(\S+)', re.IGNORECASE)


def find_restart_files(text: str, keywords: Iterable[str] = ('restart',)) -> List[str]:
    """
    Find restart files referenced in input text.

    Args:
        text: Contents of the input file
        keywords: Keywords that introduce a restart file name

    Returns:
        Referenced file names in order of first appearance, without duplicates
    """
    keywords = list(keywords)
    if not keywords:
        return []
    pattern = _reference_pattern(keywords)

    references = []
    for line in text.splitlines():
        if line.lstrip().startswith(_COMMENT_PREFIXES):
            continue
        match = pattern.match(line)
        if match:
            name = match.group(1).strip('"\'')
            if name and name not in references:
                references.append(name)
    return references


def stage_workspace(
    input_file: str,
    invoking_dir: Union[str, Path],
    scratch_root: Union[str, Path],
    pid: int,
    restart_keywords: Iterable[str] = ('restart',),
) -> Path:
    """
    Create the work directory and copy the job's files into it.

    Nothing is rolled back on failure: a restart file found missing after
    the directory was created leaves the directory and earlier copies.

    Args:
        input_file: Input file name, relative to invoking_dir
        invoking_dir: Directory the user submitted from
        scratch_root: Root under which the work directory is created
        pid: Process identifier used in the directory name
        restart_keywords: Keywords that introduce restart file names

    Returns:
        Path to the work directory

    Raises:
        StagingError: If the input or a referenced restart file is missing
    """
    invoking_dir = Path(invoking_dir)
    source = invoking_dir / input_file
    if not source.is_file():
        raise StagingError(f"Input file not found: {source}")

    work_dir = build_work_dir(scratch_root, input_file, pid)
    work_dir.mkdir(parents=True, exist_ok=True)
    print(f"Created work directory: {work_dir}")

    shutil.copy2(source, work_dir / source.name)
    print(f"  Copied {source.name}")

    with open(source, 'r', errors='replace') as f:
        text = f.read()

    for name in find_restart_files(text, restart_keywords):
        restart = invoking_dir / name
        if not restart.is_file():
            raise StagingError(f"Restart file not found: {restart} (referenced in {source.name})")
        shutil.copy2(restart, work_dir / restart.name)
        print(f"  Copied restart file {restart.name}")

    return work_dir
