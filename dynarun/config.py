"""Renderer configuration and environment detection."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

# Environment variables set by the CI providers we recognise
CI_ENV_VARS = (
    "TF_BUILD",
    "GITHUB_ACTIONS",
    "BUILDKITE",
    "CIRCLECI",
    "CIRRUS_CI",
    "TRAVIS",
    "BITBUCKET_BUILD_NUMBER",
    "CODEBUILD_BUILD_ID",
    "GITLAB_CI",
    "HEROKU_TEST_RUN_ID",
    "BUILD_ID",
    "BUILD_BUILDID",
    "TEAMCITY_VERSION",
)


def is_ci(env: Optional[Mapping[str, str]] = None) -> bool:
    """Check whether we are running inside a continuous-integration environment."""
    env = os.environ if env is None else env
    ci = env.get("CI")
    if ci and ci.lower() != "false":
        return True
    return any(env.get(name) for name in CI_ENV_VARS)


def color_forced(env: Optional[Mapping[str, str]] = None) -> bool:
    """FORCE_COLOR set to an empty string or "true" forces styling on."""
    env = os.environ if env is None else env
    return env.get("FORCE_COLOR") in ("", "true")


@dataclass(frozen=True)
class RendererConfig:
    """Options for the dynamic run renderer.

    Attributes:
        no_color: Disable all styling
        verbose: Print terminal output of every finished task, not only failures
        frame_interval: Seconds between spinner frames
        cli_name: Name shown in the inverse banner prefix
        command_prefix: Dimmed command shown before each task id
        max_failed_listed: Failed task ids listed in the failure summary
        install_signal_handlers: Restore the terminal on SIGINT/SIGTERM/SIGHUP
    """

    no_color: bool = False
    verbose: bool = False
    frame_interval: float = 0.1
    cli_name: str = "RUN"
    command_prefix: str = "run"
    max_failed_listed: int = 5
    install_signal_handlers: bool = True

    def __post_init__(self) -> None:
        if self.frame_interval <= 0:
            raise ValueError(f"frame_interval must be positive, got {self.frame_interval}")
        if self.max_failed_listed < 1:
            raise ValueError(f"max_failed_listed must be at least 1, got {self.max_failed_listed}")

    @property
    def view_logs_hint(self) -> str:
        return f'Hint: Try "{self.cli_name.lower()} view-logs" to get structured, searchable errors logs in your browser.'

    @classmethod
    def from_environment(
        cls,
        env: Optional[Mapping[str, str]] = None,
        **options,
    ) -> "RendererConfig":
        """Build a config, disabling colour in CI unless it is forced on."""
        if "no_color" not in options:
            options["no_color"] = is_ci(env) and not color_forced(env)
        return cls(**options)
