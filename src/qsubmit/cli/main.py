"""
Command-line interface for qsubmit.

Submission runs in three steps, each once and in order:
    1. Resolve partition, node count and time against sinfo limits
    2. Stage the input and its restart files into $SCRATCH/<input>.<pid>/
    3. Render <name>.job.<pid> in the work directory and submit it with sbatch

Examples:
    qsubmit water.inp -q normal -n 4 -t 02:00:00
    qsubmit water                   # prompts for the queue, nodes and time
    qsubmit water.inp -m            # prompts for everything, ignoring flags
    qsubmit water.inp -q debug -n 2 -t 00:45:00 --dry-run
"""

import os

import click

from ..config import load_config
from ..errors import QsubmitError
from ..options import resolve_request
from ..path_utils import with_default_extension
from ..scheduler.slurm import SlurmScheduler
from ..scheduler.templates import render_job_script, write_job_script
from ..staging import stage_workspace


def _print_usage(ctx, param, value):
    """Print help and exit non-zero, like the usage() of a batch wrapper script."""
    if not value or ctx.resilient_parsing:
        return
    click.echo(ctx.get_help())
    ctx.exit(1)


@click.command(add_help_option=False)
@click.argument('input_file')
@click.option('--manual', '-m', is_flag=True,
              help='Prompt for queue, nodes and time, ignoring any flags')
@click.option('--queue', '-q', help='Queue (partition) name')
@click.option('--nodes', '-n', help='Number of nodes')
@click.option('--time', '-t', 'walltime', help='Wall-clock time as [D-]HH:MM:SS')
@click.option('--config', '-c', 'config_path', type=click.Path(exists=True),
              help='Site config YAML file (default: $QSUBMIT_CONFIG or ~/.config/qsubmit/config.yaml)')
@click.option('--dry-run', is_flag=True, help='Stage and write the job script without submitting')
@click.option('--help', '-h', is_flag=True, expose_value=False, is_eager=True,
              callback=_print_usage, help='Show this message and exit.')
@click.version_option()
def cli(input_file, manual, queue, nodes, walltime, config_path, dry_run):
    """Stage INPUT_FILE on scratch and submit it as a Slurm job.

    The extension of INPUT_FILE is optional.
    """
    try:
        config = load_config(config_path)
        input_name = with_default_extension(input_file, config.default_extension)
        scheduler = SlurmScheduler(dry_run=dry_run)

        request = resolve_request(
            scheduler,
            input_name,
            queue=queue,
            nodes=nodes,
            walltime=walltime,
            manual=manual,
        )
        click.echo(f"Queue: {request.queue}, nodes: {request.nodes}, time: {request.walltime}")

        account = config.account
        scratch_root = config.scratch_root()
        pid = os.getpid()

        work_dir = stage_workspace(
            input_name,
            invoking_dir=config.invoking_dir(),
            scratch_root=scratch_root,
            pid=pid,
            restart_keywords=config.restart_keywords,
        )

        script = render_job_script(
            request,
            account=account,
            executable=config.executable,
            gpu_cache_dir=config.gpu_cache_dir,
        )
        script_path = write_job_script(script, work_dir, input_name, pid)

        result = scheduler.submit(script_path)
    except QsubmitError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    if dry_run:
        click.echo("\n=== Generated Script ===")
        click.echo(script)
        return

    if result.diagnostics:
        click.echo(result.diagnostics, err=True)
    click.echo(result.output)


if __name__ == '__main__':
    cli()
