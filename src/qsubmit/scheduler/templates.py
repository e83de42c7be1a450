"""
Slurm job script template.

render_job_script() is a pure function of the resolved request, so the
script can be checked without touching the filesystem or the scheduler.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Union

from ..path_utils import job_name, job_script_name

if TYPE_CHECKING:
    from ..options import JobRequest

# Fixed per-node layout: one task per GPU, 16 cores per task
NTASKS_PER_NODE = 4
CPUS_PER_TASK = 16
GPUS_PER_NODE = 4
GPU_BIND = 'closest'
CPU_BIND = 'cores'


JOB_SCRIPT_TEMPLATE = """#!/bin/bash
#SBATCH --job-name={job_name}
#SBATCH --account={account}
#SBATCH --time={walltime}
#SBATCH --nodes={nodes}
#SBATCH --partition={queue}
#SBATCH --ntasks-per-node={ntasks_per_node}
#SBATCH --cpus-per-task={cpus_per_task}
#SBATCH --gpus-per-node={gpus_per_node}
#SBATCH --gpu-bind={gpu_bind}
#SBATCH --output=%x.o%j
#SBATCH --error=%x.e%j

export CUDA_CACHE_PATH={gpu_cache_dir}
export OMP_NUM_THREADS=$SLURM_CPUS_PER_TASK
ulimit -s unlimited

cd "$SLURM_SUBMIT_DIR"

jobs=("{input_name}")

for job in "${{jobs[@]}}"; do
    srun --cpu-bind={cpu_bind} {executable} "$job" > "${{job%.*}}.out"
done
"""


def render_job_script(
    request: 'JobRequest',
    account: str,
    executable: str,
    gpu_cache_dir: str,
) -> str:
    """
    Render the submission script for a resolved request.

    Args:
        request: Resolved JobRequest
        account: Allocation account charged for the job
        executable: Computation binary launched by srun
        gpu_cache_dir: Directory for the GPU kernel cache

    Returns:
        Script text
    """
    input_name = Path(request.input_file).name
    return JOB_SCRIPT_TEMPLATE.format(
        job_name=job_name(input_name),
        account=account,
        walltime=request.walltime,
        nodes=request.nodes,
        queue=request.queue,
        ntasks_per_node=NTASKS_PER_NODE,
        cpus_per_task=CPUS_PER_TASK,
        gpus_per_node=GPUS_PER_NODE,
        gpu_bind=GPU_BIND,
        cpu_bind=CPU_BIND,
        gpu_cache_dir=gpu_cache_dir,
        input_name=input_name,
        executable=executable,
    )


def write_job_script(
    content: str,
    work_dir: Union[str, Path],
    input_file: Union[str, Path],
    pid: int,
) -> Path:
    """
    Write a rendered script into the work directory as <stem>.job.<pid>.

    Returns:
        Path to the written script
    """
    script_path = Path(work_dir) / job_script_name(Path(input_file).name, pid)
    with open(script_path, 'w') as f:
        f.write(content)
    print(f"Wrote job script: {script_path}")
    return script_path
