"""
qsubmit - Prepare and submit a single batch job to a Slurm cluster.

This package provides tools for:
- Resolving partition, node count and wall-clock time against live cluster limits
- Staging the input and its restart files into a scratch work directory
- Rendering the job script and handing it to sbatch
"""

__version__ = "1.0.0"
