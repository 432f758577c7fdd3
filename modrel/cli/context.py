from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from modrel.core.config import Config, load_config_or_default
from modrel.core.errors import ErrorCode
from modrel.core.repo import detect_repo_root
from modrel.core.result import Err
from modrel.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    repo_root: Path
    config: Config
    console: ConsoleProtocol

    def versioning_path(self, override: Path | None) -> Path:
        """The manifest path: --versioning-file if given, else from config."""
        if override is not None:
            return override.expanduser().resolve()
        return self.config.versioning_path(self.repo_root)


def build_context() -> CLIContext:
    repo_result = detect_repo_root()
    if isinstance(repo_result, Err):
        typer.echo(f"error: {repo_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

    repo_root = repo_result.value
    config_result = load_config_or_default(repo_root)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

    return CLIContext(repo_root=repo_root, config=config_result.value, console=RichConsole())
