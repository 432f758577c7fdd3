"""Git operations for the release drivers.

Usage:
    from modrel.git import Repository

    repo = Repository(Path("/path/to/repo"))
    if not repo.is_working_tree_clean():
        ...
"""

from modrel.git.repository import GitError, Repository, SourceControl

__all__ = [
    "GitError",
    "Repository",
    "SourceControl",
]
