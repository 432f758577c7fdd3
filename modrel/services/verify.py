from __future__ import annotations

from modrel.core.result import Err, Ok, Result
from modrel.output.console import ConsoleProtocol
from modrel.services.state import RepoState
from modrel.versioning.errors import (
    InvalidVersionError,
    MajorVersionCollisionError,
    OrphanManifestEntryError,
    UnregisteredModuleError,
)
from modrel.versioning.verify import (
    UnstableDependency,
    verify_all_modules_in_set,
    verify_dependencies,
    verify_versions,
)

VerifyError = (
    UnregisteredModuleError
    | OrphanManifestEntryError
    | InvalidVersionError
    | MajorVersionCollisionError
)


def run_verify(
    state: RepoState,
    console: ConsoleProtocol,
) -> Result[list[UnstableDependency], VerifyError]:
    """Run membership, version and dependency checks, in that order.

    Stops at the first failing check. Dependency findings are printed as
    warnings and returned; they never fail the run.
    """
    membership = verify_all_modules_in_set(state.discovered, state.registry.module_info)
    if isinstance(membership, Err):
        return membership
    console.success("All modules exist in exactly one set.")

    versions = verify_versions(state.registry.module_sets)
    if isinstance(versions, Err):
        return versions
    console.success(
        "All module versions are valid, and no module sets have same non-zero major version."
    )

    findings = verify_dependencies(
        state.registry.module_info,
        state.discovered,
        console=console,
    )
    for finding in findings:
        console.warning(finding.message)
    console.info("Finished checking all stable modules' dependencies.")

    return Ok(findings)
