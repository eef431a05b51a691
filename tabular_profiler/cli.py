"""
Command-line interface for the Tabular Profiler.

Provides commands for:
- Profiling one delimited file
- Profiling several files and picking the primary dataset
- Showing the version
"""

import click
import sys
import time
from datetime import datetime

from tabular_profiler import __version__
from tabular_profiler.core.config import ProfilerConfig
from tabular_profiler.core.exceptions import ConfigError, ProfilingError
from tabular_profiler.core.logging_config import setup_logging, get_logger
from tabular_profiler.core.pretty_output import PrettyOutput as po
from tabular_profiler.profiler.engine import DataProfiler
from tabular_profiler.profiler.json_utils import save_batch_json, save_profile_json
from tabular_profiler.profiler.profile_result import DatasetProfile
from tabular_profiler.reporters.csv_exporter import write_preview_csv
from tabular_profiler.utils.path_patterns import PathPatternExpander

logger = get_logger(__name__)

LOG_LEVELS = click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False)


def _load_config(config_file, workers):
    """Build the profiler configuration from CLI options."""
    config = ProfilerConfig.from_yaml(config_file) if config_file else ProfilerConfig()
    if workers is not None:
        overrides = config.to_dict()
        overrides['max_workers'] = workers
        config = ProfilerConfig.from_dict(overrides)
    return config


def _print_profile(profile: DatasetProfile, duration: float) -> None:
    """Print the column summary table of a profile."""
    po.profile_summary(profile.row_count, len(profile.columns), profile.delimiter, duration)
    po.section(f"Columns of {profile.file_name}")

    rows = []
    for column in profile.columns:
        stats = column.stats
        if stats.mean is not None:
            summary = f"min={stats.min:g} max={stats.max:g} mean={stats.mean:g}"
        elif stats.top_values:
            top = stats.top_values[0]
            summary = f"top={top.name!r} ({top.value})"
        elif stats.histogram:
            summary = f"{stats.histogram[0].name} .. {len(stats.histogram)} bins"
        else:
            summary = ""
        example = column.example if column.example is not None else ""
        rows.append((column.name, column.type.value, column.missing, column.unique, example[:20], summary))

    po.compact_table(["Column", "Type", "Missing", "Unique", "Example", "Summary"], rows)


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    Tabular Profiler - schema recovery and statistics for delimited files.

    Detects the delimiter, validates structure, infers a type per column
    and computes chart-ready statistics without any schema hints.
    """
    pass


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--json-output', '-j', help='Path for JSON profile output (supports {file_name}, {date}, ...)')
@click.option('--preview-csv', '-p', help='Path for the preview CSV export (supports {file_name}, {date}, ...)')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True, dir_okay=False),
              help='YAML file with profiler settings')
@click.option('--workers', '-w', type=click.IntRange(min=1), default=None,
              help='Threads used for per-column profiling')
@click.option('--log-level', type=LOG_LEVELS, default='WARNING', help='Logging level')
@click.option('--log-file', type=click.Path(), help='Optional log file path')
def profile(file_path, json_output, preview_csv, config_file, workers, log_level, log_file):
    """
    Profile a delimited text file.

    FILE_PATH: Path to the file to profile

    Examples:

    \b
    # Profile a CSV file
    tabular-profiler profile data/customers.csv

    \b
    # Save the profile and the preview export
    tabular-profiler profile data.csv -j "profiles/{file_name}_{date}.json" -p preview.csv
    """
    expander = PathPatternExpander(run_timestamp=datetime.now())
    setup_logging(level=log_level, log_file=expander.expand(log_file) if log_file else None)
    logger.info(f"Starting profile: {file_path}")

    try:
        profiler = DataProfiler(_load_config(config_file, workers))
        po.task_start(f"Profiling {file_path}")
        start_time = time.time()
        result = profiler.profile_file(file_path)
        duration = time.time() - start_time
    except (ConfigError, ProfilingError) as e:
        po.error(e.message)
        sys.exit(1)

    _print_profile(result, duration)

    context = {'file_name': result.file_name}
    if json_output or preview_csv:
        po.blank_line()
    if json_output:
        json_path = expander.expand(json_output, context)
        save_profile_json(result, json_path)
        po.output_file("JSON", json_path)
    if preview_csv:
        csv_path = write_preview_csv(result, expander.expand(preview_csv, context))
        if csv_path:
            po.output_file("CSV", csv_path)
        else:
            po.warning("Preview is empty; nothing exported")


@cli.command()
@click.argument('file_paths', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option('--json-output', '-j', help='Path for JSON output of all profiles')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True, dir_okay=False),
              help='YAML file with profiler settings')
@click.option('--log-level', type=LOG_LEVELS, default='WARNING', help='Logging level')
def batch(file_paths, json_output, config_file, log_level):
    """
    Profile several files and report the primary (largest) dataset.

    Files not ending in .csv are skipped. Stops at the first file that
    fails to profile.
    """
    setup_logging(level=log_level)
    logger.info(f"Starting batch profile of {len(file_paths)} files")
    expander = PathPatternExpander(run_timestamp=datetime.now())

    try:
        profiler = DataProfiler(_load_config(config_file, None))
        po.task_start(f"Profiling {len(file_paths)} files")
        start_time = time.time()
        result = profiler.profile_files(file_paths)
        duration = time.time() - start_time
    except (ConfigError, ProfilingError) as e:
        po.error(e.message)
        sys.exit(1)

    for item in result.profiles:
        po.success(f"{item.file_name}: {item.row_count:,} rows, {len(item.columns)} columns")
    po.metric("Primary dataset", result.primary.file_name)
    po.task_complete("Batch profiling complete", duration)

    if json_output:
        json_path = expander.expand(json_output)
        save_batch_json(result, json_path)
        po.output_file("JSON", json_path)


@cli.command()
def version():
    """Show version information."""
    click.echo(f"tabular-profiler {__version__}")


if __name__ == '__main__':
    cli()
