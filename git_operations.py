"""Git operations for reading commit diffs as patches."""

from typing import Optional

from git import Repo
from git.exc import BadName, BadObject, GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from diff_parser import Diff, PatchError
from log_setup import get_logger

logger = get_logger(__name__)


class PatchSourceError(PatchError):
    """The patch text could not be read from its source."""


def get_commit_diff(repo_path: str, commit_sha: str, parent_commit: Optional[str] = None) -> str:
    """
    Get the git diff for a specific commit.

    Args:
        repo_path: Path to the git repository
        commit_sha: SHA of the commit to get diff for
        parent_commit: SHA of parent commit. If None, uses commit^

    Returns:
        Raw git diff output as string, ending with a newline

    Raises:
        PatchSourceError: If the repository or a revision cannot be read
    """
    try:
        repo = Repo(repo_path)

        if parent_commit is None:
            commit = repo.commit(commit_sha)
            if commit.parents:
                diff = repo.git.diff(commit.parents[0].hexsha, commit.hexsha)
            else:
                # Root commit - show every file as added
                diff = repo.git.show(commit.hexsha, format="")
        else:
            diff = repo.git.diff(parent_commit, commit_sha)
    except (InvalidGitRepositoryError, NoSuchPathError) as exc:
        raise PatchSourceError(f"not a git repository: {repo_path}") from exc
    except (BadName, BadObject, ValueError, GitCommandError) as exc:
        raise PatchSourceError(f"cannot diff {commit_sha} in {repo_path}: {exc}") from exc

    # GitPython strips the final newline from command output
    if diff and not diff.endswith("\n"):
        diff += "\n"

    logger.debug("commit_diff_loaded", repo=repo_path, commit=commit_sha, length=len(diff))
    return diff


def parse_commit(repo_path: str, commit_sha: str, parent_commit: Optional[str] = None) -> Diff:
    """Parse the diff of a commit; see get_commit_diff for the arguments."""
    return Diff.parse(get_commit_diff(repo_path, commit_sha, parent_commit))
