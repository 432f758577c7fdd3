"""Preparing a module set release on a new branch.

Steps, each stopping the run on failure:
1. No tag for the new version exists yet.
2. The working tree has no tracked changes.
3. Branch `<prefix>_<set>_<version>` is created from the base branch.
4. Every declaration file's requirements on the set's modules are bumped.
5. `make lint` and `make ci` run (unless skipped).
6. All changes are committed.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

from modrel.core.config import PrereleaseConfig
from modrel.core.result import Err, Ok, Result
from modrel.git.repository import SourceControl
from modrel.output.console import ConsoleProtocol, Style
from modrel.platform.process import run as run_process
from modrel.services.release_errors import (
    DeclarationUpdateError,
    ExternalToolError,
    ReleaseError,
    TagAlreadyExistsError,
    WorkingTreeDirtyError,
)
from modrel.versioning.modfile import rewrite_requirement_versions
from modrel.versioning.tags import ReleaseTargets

__all__ = [
    "MakeRunner",
    "PrereleaseService",
    "prerelease_branch_name",
    "run_make_target",
    "update_declaration_files",
    "verify_tags_do_not_exist",
    "verify_working_tree_clean",
]

MakeRunner = Callable[[str], Result[None, ExternalToolError]]

# make ci runs the full test suite across every module.
_MAKE_TIMEOUT_SECONDS = 60 * 60.0


def run_make_target(target: str, *, cwd: Path) -> Result[None, ExternalToolError]:
    match run_process(["make", target], cwd=cwd, timeout=_MAKE_TIMEOUT_SECONDS):
        case Ok(_):
            return Ok(None)
        case Err(e):
            return Err(ExternalToolError.from_process(e))


def prerelease_branch_name(prefix: str, set_name: str, version: str) -> str:
    return "_".join([prefix, set_name, version])


def verify_tags_do_not_exist(
    scm: SourceControl,
    full_tags: Iterable[str],
) -> Result[None, TagAlreadyExistsError | ExternalToolError]:
    for tag in full_tags:
        match scm.tag_exists(tag):
            case Ok(True):
                return Err(TagAlreadyExistsError(tag))
            case Ok(False):
                continue
            case Err(e):
                return Err(ExternalToolError.from_git(e))
    return Ok(None)


def verify_working_tree_clean(
    scm: SourceControl,
) -> Result[None, WorkingTreeDirtyError | ExternalToolError]:
    match scm.working_tree_diff():
        case Ok(""):
            return Ok(None)
        case Ok(diff):
            return Err(WorkingTreeDirtyError(diff))
        case Err(e):
            return Err(ExternalToolError.from_git(e))


def update_declaration_files(
    version: str,
    module_paths: Iterable[str],
    declaration_files: Iterable[Path],
) -> Result[list[Path], DeclarationUpdateError]:
    """Point every requirement on module_paths at version.

    Returns the files that changed; untouched files are not rewritten.
    """
    paths = list(module_paths)
    changed: list[Path] = []
    for declaration_file in declaration_files:
        try:
            original = declaration_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return Err(DeclarationUpdateError(declaration_file, str(e)))

        updated = rewrite_requirement_versions(original, paths, version)
        if updated == original:
            continue

        try:
            declaration_file.write_text(updated, encoding="utf-8")
        except OSError as e:
            return Err(DeclarationUpdateError(declaration_file, str(e)))
        changed.append(declaration_file)
    return Ok(changed)


class PrereleaseService:
    """Runs the prerelease steps for one module set."""

    def __init__(
        self,
        *,
        scm: SourceControl,
        repo_root: Path,
        config: PrereleaseConfig,
        console: ConsoleProtocol,
        make: MakeRunner | None = None,
    ) -> None:
        self._scm = scm
        self._repo_root = repo_root
        self._config = config
        self._console = console
        self._make: MakeRunner = make or (lambda target: run_make_target(target, cwd=repo_root))

    def run(
        self,
        targets: ReleaseTargets,
        declaration_files: Iterable[Path],
        *,
        base_branch: str,
        skip_make: bool = False,
    ) -> Result[str, ReleaseError]:
        """Prepare the release branch; returns the new branch name.

        Args:
            targets: Version, modules and tags of the set being released
            declaration_files: Every discovered declaration file in the repo
            base_branch: Branch the release branch starts from
            skip_make: Skip `make lint` / `make ci` (debugging only)
        """
        full_tags = targets.full_tags
        self._console.print(f"Checking for tags {', '.join(full_tags)}", Style.DIM)
        tags_ok = verify_tags_do_not_exist(self._scm, full_tags)
        if isinstance(tags_ok, Err):
            return tags_ok

        clean = verify_working_tree_clean(self._scm)
        if isinstance(clean, Err):
            return clean

        branch = prerelease_branch_name(
            self._config.branch_prefix, targets.set_name, targets.version
        )
        self._console.print(f"git checkout -b {branch} {base_branch}", Style.DIM)
        created = self._scm.create_branch(branch, base_branch)
        if isinstance(created, Err):
            return Err(ExternalToolError.from_git(created.error))

        self._console.info("Updating all module versions in declaration files...")
        updated = update_declaration_files(
            targets.version, targets.module_paths, declaration_files
        )
        if isinstance(updated, Err):
            return updated
        for path in updated.value:
            self._console.print(f"updated {path.relative_to(self._repo_root)}", Style.DIM)

        if skip_make:
            self._console.info(
                f"Skipping 'make {self._config.lint_target}' and 'make {self._config.ci_target}'..."
            )
        else:
            for target in (self._config.lint_target, self._config.ci_target):
                self._console.info(f"Running 'make {target}'...")
                made = self._make(target)
                if isinstance(made, Err):
                    return made

        message = f"Prepare for releasing {targets.version}"
        self._console.info(f"Commit changes to git with message '{message}'...")
        committed = self._scm.commit_all(message)
        if isinstance(committed, Err):
            return Err(ExternalToolError.from_git(committed.error))

        return Ok(branch)
