"""
Configuration management for markdown-test-report.
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .addons.base import Addon

logger = logging.getLogger(__name__)

DEFAULT_INPUT = "test-output.json"
STDIO = "-"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


class ConfigurationError(Exception):
    """Raised when configuration is invalid or cannot be loaded."""

    pass


@dataclass
class ReportOptions:
    """Options controlling what the Markdown renderer writes."""

    disable_front_matter: bool = False
    summary_only: bool = False
    precise: bool = False
    addons: List[Addon] = field(default_factory=list)


@dataclass
class CiEnvironment:
    """CI run information used for the front-matter title and the job link.

    Example::

        env = CiEnvironment.from_environ(os.environ)
        env.job_url  # https://github.com/owner/repo/actions/runs/42
    """

    run_id: Optional[str] = None
    repository: Optional[str] = None
    server_url: str = "https://github.com"

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> "CiEnvironment":
        """Read the GitHub Actions variables from an environment mapping."""
        return cls(
            run_id=environ.get("GITHUB_RUN_ID") or None,
            repository=environ.get("GITHUB_REPOSITORY") or None,
            server_url=environ.get("GITHUB_SERVER_URL") or "https://github.com",
        )

    @property
    def job_url(self) -> Optional[str]:
        """Return the link to the CI job, or None unless both ids are known."""
        if not self.run_id or not self.repository:
            return None
        server = self.server_url.rstrip("/")
        return f"{server}/{self.repository}/actions/runs/{self.run_id}"


@dataclass
class ReportConfig:
    """Main configuration for a report generation run."""

    # Input and output
    input: str = DEFAULT_INPUT
    output: Optional[str] = None

    # Report content
    disable_front_matter: bool = False
    summary_only: bool = False
    precise: bool = False

    # Git addon
    git_enabled: bool = True
    git_path: str = "."
    git_required: bool = False

    @property
    def output_path(self) -> str:
        """Return the output destination, derived from the input if unset."""
        if self.output:
            return self.output
        if self.input == STDIO:
            return STDIO
        return f"{Path(self.input).stem}.md"

    def report_options(self, addons: Optional[List[Addon]] = None) -> ReportOptions:
        """Build renderer options from this configuration."""
        return ReportOptions(
            disable_front_matter=self.disable_front_matter,
            summary_only=self.summary_only,
            precise=self.precise,
            addons=list(addons or []),
        )


def _parse_env_bool(var_name: str) -> Optional[bool]:
    """
    Safely parse a boolean from an environment variable.

    Args:
        var_name: Name of the environment variable

    Returns:
        Parsed value, or None if the variable is not set

    Raises:
        ConfigurationError: If the value is not a recognised boolean
    """
    value = os.environ.get(var_name)
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    raise ConfigurationError(
        f"Environment variable {var_name} must be a boolean (true/false), got: '{value}'"
    )


def _load_from_env() -> Dict[str, Any]:
    """
    Load configuration from environment variables.

    Supported environment variables:
    - MDTR_OUTPUT: Output file name
    - MDTR_NO_FRONT_MATTER: Omit the front-matter block
    - MDTR_SUMMARY: Only render the summary section
    - MDTR_PRECISE: Render exact sub-second durations
    - MDTR_GIT: Repository location, makes the git information required
    - MDTR_NO_GIT: Disable the git information

    Returns:
        Dictionary of configuration values from environment

    Raises:
        ConfigurationError: If environment variable values are invalid
    """
    env_config: Dict[str, Any] = {}

    if "MDTR_OUTPUT" in os.environ:
        env_config["output"] = os.environ["MDTR_OUTPUT"]

    flags = {
        "MDTR_NO_FRONT_MATTER": "disable_front_matter",
        "MDTR_SUMMARY": "summary_only",
        "MDTR_PRECISE": "precise",
    }
    for var_name, key in flags.items():
        value = _parse_env_bool(var_name)
        if value is not None:
            env_config[key] = value

    if "MDTR_GIT" in os.environ:
        env_config["git_path"] = os.environ["MDTR_GIT"]
        env_config["git_required"] = True

    no_git = _parse_env_bool("MDTR_NO_GIT")
    if no_git is not None:
        env_config["git_enabled"] = not no_git

    return env_config


def load_config(config_file: Optional[str] = None) -> ReportConfig:
    """
    Load configuration from file and environment variables.

    Configuration precedence (highest to lowest):
    1. Environment variables
    2. Configuration file
    3. Default values

    Command-line options are applied on top by the caller.

    Args:
        config_file: Path to YAML configuration file (optional)

    Returns:
        ReportConfig object with merged configuration

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist
        ConfigurationError: If config file has invalid YAML or env vars are invalid
    """
    config_data: Dict[str, Any] = {}

    if config_file:
        logger.info("Loading configuration from %s", config_file)
        try:
            with open(config_file, "r") as f:
                file_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file '{config_file}': {e}")
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {config_file}")
        except PermissionError:
            raise ConfigurationError(f"Permission denied reading config file '{config_file}'")
        except OSError as e:
            raise ConfigurationError(f"Unable to read config file '{config_file}': {e}")
        if not isinstance(file_config, dict):
            raise ConfigurationError(f"Config file '{config_file}' must contain a mapping")
        config_data.update(file_config)

    env_overrides = _load_from_env()
    config_data.update(env_overrides)
    if env_overrides:
        logger.debug("Applied environment variable overrides: %s", list(env_overrides.keys()))

    try:
        return ReportConfig(**config_data)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def validate_config(config: ReportConfig) -> List[str]:
    """
    Validate configuration and return list of errors.

    Args:
        config: ReportConfig to validate

    Returns:
        List of error messages (empty if valid)
    """
    errors: List[str] = []

    if not isinstance(config.input, str):
        errors.append(f"input must be a string: {config.input!r}")
    elif not config.input:
        errors.append("input is required")

    if config.output is not None:
        if not isinstance(config.output, str):
            errors.append(f"output must be a string: {config.output!r}")
        elif not config.output:
            errors.append("output must not be empty")

    for f in fields(config):
        if f.type in (bool, "bool") and not isinstance(getattr(config, f.name), bool):
            errors.append(f"{f.name} must be true or false: {getattr(config, f.name)!r}")

    if not isinstance(config.git_path, str):
        errors.append(f"git_path must be a string: {config.git_path!r}")
    elif not config.git_path:
        errors.append("git_path must not be empty")

    if config.git_required and not config.git_enabled:
        errors.append("git_required cannot be set when git information is disabled")

    return errors
