"""
Command-line interface for markdown-test-report.
"""

import logging
import os
import sys
from typing import List, Optional

import click

from . import __version__
from .addons import Addon, GitInfo
from .config import ConfigurationError, CiEnvironment, ReportConfig, load_config, validate_config
from .events import read_events
from .exceptions import AddonError, ReportError
from .processor import ReportProcessor

logger = logging.getLogger(__name__)


def _log_level(quiet: bool, verbose: int) -> int:
    """Map the --quiet/--verbose flags to a logging level."""
    if quiet:
        return logging.CRITICAL + 10
    if verbose == 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG


def _build_addons(config: ReportConfig) -> List[Addon]:
    addons: List[Addon] = []
    if config.git_enabled:
        addons.append(GitInfo(config.git_path, required=config.git_required))
    return addons


def _apply_overrides(
    config: ReportConfig,
    input: Optional[str],
    output: Optional[str],
    no_front_matter: bool,
    git: Optional[str],
    no_git: bool,
    summary: bool,
    precise: bool,
) -> None:
    """Apply command-line options on top of the loaded configuration."""
    if input is not None:
        config.input = input
    if output is not None:
        config.output = output
    if no_front_matter:
        config.disable_front_matter = True
    if summary:
        config.summary_only = True
    if precise:
        config.precise = True
    if git is not None:
        config.git_path = git
        config.git_required = True
    if no_git:
        config.git_enabled = False


def generate_report(config: ReportConfig, environment: Optional[CiEnvironment] = None) -> None:
    """
    Read the test events named by the configuration and write the report.

    Raises:
        OSError: If the input cannot be read or the output cannot be written
        AddonError: If a required addon fails
    """
    environment = environment or CiEnvironment.from_environ(os.environ)
    options = config.report_options(_build_addons(config))

    logger.debug("Reading from: %s", config.input)
    logger.debug("Writing to: %s", config.output_path)

    with click.open_file(config.input, "r", encoding="utf-8", errors="replace") as reader:
        with click.open_file(config.output_path, "w", encoding="utf-8") as writer:
            with ReportProcessor(writer, options, environment) as processor:
                processor.ingest_all(read_events(reader))


@click.command()
@click.argument("input", required=False)
@click.option(
    "-o",
    "--output",
    type=str,
    help="Name of the output file, '-' for stdout (default: input name with .md)",
)
@click.option(
    "-d",
    "--no-front-matter",
    is_flag=True,
    help="Disable the report front-matter",
)
@click.option(
    "-g",
    "--git",
    type=click.Path(file_okay=False),
    help="Git top-level location; makes git information required [default: .]",
)
@click.option(
    "-n",
    "--no-git",
    is_flag=True,
    help="Disable extracting git information",
)
@click.option(
    "-s",
    "--summary",
    is_flag=True,
    help="Show only the summary section",
)
@click.option(
    "-p",
    "--precise",
    is_flag=True,
    help="Render durations with sub-second precision",
)
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to configuration file (YAML)",
)
@click.option("-q", "--quiet", is_flag=True, help="Be quiet")
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Be more verbose. May be repeated multiple times",
)
@click.version_option(version=__version__, prog_name="markdown-test-report")
def main(
    input: Optional[str],
    output: Optional[str],
    no_front_matter: bool,
    git: Optional[str],
    no_git: bool,
    summary: bool,
    precise: bool,
    config: Optional[str],
    quiet: bool,
    verbose: int,
) -> None:
    """
    Markdown Test Reporter - turn JSON test output into a Markdown report.

    INPUT is the file with the JSON test data, one event per line
    (default: test-output.json, '-' for stdin). Lines that are not
    test events are ignored.

    Examples:

      # Produce test-output.md from test-output.json
      cargo test -- -Z unstable-options --format json > test-output.json
      markdown-test-report

      # Summary only, written to stdout
      markdown-test-report --summary --output - results.json
    """
    if quiet and verbose:
        raise click.UsageError("--quiet cannot be used together with --verbose")
    if git is not None and no_git:
        raise click.UsageError("--git cannot be used together with --no-git")

    logging.basicConfig(
        level=_log_level(quiet, verbose),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        stream=sys.stderr,
    )

    try:
        report_config = load_config(config)
        _apply_overrides(
            report_config, input, output, no_front_matter, git, no_git, summary, precise
        )

        errors = validate_config(report_config)
        if errors:
            click.echo("Configuration errors:", err=True)
            for error in errors:
                click.echo(f"  - {error}", err=True)
            sys.exit(1)

        generate_report(report_config)
        logger.info("Report written to: %s", report_config.output_path)

    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except AddonError as e:
        logger.error("Addon error: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except FileNotFoundError as e:
        logger.error("File not found: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except (OSError, ReportError) as e:
        logger.error("Unable to write report: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
