import re
from logging import getLogger
from pathlib import Path

from git import Repo as GitRepo
from git.exc import (
    GitCommandError,
    GitCommandNotFound,
    InvalidGitRepositoryError,
    NoSuchPathError,
)

from blametint.constants import (
    DEFAULT_COPY_MOVE,
    GIT_BLAME_TIMEOUT,
    IGNORE_REVS_FILE_NAME,
)
from blametint.typedefs import BlameStr, FileStr

logger = getLogger(__name__)

GIT_NOT_FOUND_MSG = (
    "Git not found. Make sure Git is installed and available in the PATH"
)


class BlameCommandError(Exception):
    """Git blame could not be run. The message is meant for the user."""


class BlameReader:
    def __init__(self, whitespace: bool = True, copy_move: int = DEFAULT_COPY_MOVE):
        self.whitespace: bool = whitespace
        self.copy_move: int = copy_move

    def get_blame_str(self, fstr: FileStr) -> BlameStr:
        path = Path(fstr).resolve()
        if not path.is_file():
            raise BlameCommandError(f"{fstr} is not a file")
        git_repo = self._open_git_repo(path)
        try:
            relative_fstr = self._get_relative_fstr(git_repo, path)
            blame_opts = self._get_blame_opts(git_repo)
            logger.info(
                f"Running git blame --porcelain {' '.join(blame_opts)} {relative_fstr}"
            )
            blame_str: BlameStr = git_repo.git.blame(
                "--porcelain",
                *blame_opts,
                "--",
                relative_fstr,
                kill_after_timeout=GIT_BLAME_TIMEOUT,
            )  # type: ignore
        except GitCommandNotFound as e:
            logger.debug(f"Blame returned an error: {e}")
            raise BlameCommandError(GIT_NOT_FOUND_MSG) from e
        except GitCommandError as e:
            logger.debug(f"Blame returned an error: {e}")
            raise BlameCommandError(get_git_error_message(e)) from e
        finally:
            git_repo.close()
        return blame_str

    def get_repository_url(self, fstr: FileStr) -> str:
        git_repo = self._open_git_repo(Path(fstr).resolve())
        try:
            remote_url: str = git_repo.remote("origin").url
        except ValueError:
            # No remote named origin
            return ""
        finally:
            git_repo.close()
        return normalize_remote_url(remote_url)

    def _open_git_repo(self, path: Path) -> GitRepo:
        try:
            git_repo = GitRepo(path.parent, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise BlameCommandError(f"{path} is not in a git repository") from e
        if git_repo.working_tree_dir is None:
            git_repo.close()
            raise BlameCommandError(f"{path} is in a bare git repository")
        return git_repo

    def _get_relative_fstr(self, git_repo: GitRepo, path: Path) -> FileStr:
        work_tree = Path(git_repo.working_tree_dir).resolve()  # type: ignore
        logger.debug(f"Work tree root: {work_tree}")
        try:
            return path.relative_to(work_tree).as_posix()
        except ValueError as e:
            raise BlameCommandError(f"{path} is outside of {work_tree}") from e

    def _get_blame_opts(self, git_repo: GitRepo) -> list[str]:
        copy_move_int2opts: dict[int, list[str]] = {
            0: [],
            1: ["-M"],
            2: ["-C"],
            3: ["-C", "-C"],
            4: ["-C", "-C", "-C"],
        }
        blame_opts: list[str] = list(copy_move_int2opts[self.copy_move])
        if not self.whitespace:
            blame_opts.append("-w")
        work_tree = Path(git_repo.working_tree_dir)  # type: ignore
        ignore_revs_path = work_tree / IGNORE_REVS_FILE_NAME
        if ignore_revs_path.exists():
            blame_opts.append(f"--ignore-revs-file={str(ignore_revs_path)}")
        return blame_opts


def get_git_error_message(e: GitCommandError) -> str:
    # GitPython formats stderr as "\n  stderr: '<git output>'"
    match = re.search(r"stderr: '(.*)'", str(e.stderr), re.DOTALL)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return f"Git blame failed with exit code {e.status}"


def normalize_remote_url(remote_url: str) -> str:
    if remote_url.startswith("https://github.com/"):
        # https://github.com/owner/repo.git
        return re.sub(r"\.git$", "", remote_url)
    if remote_url.startswith("git@github.com:"):
        # git@github.com:owner/repo.git
        url = re.sub(r"^git@github\.com:", "https://github.com/", remote_url)
        return re.sub(r"\.git$", "", url)
    return remote_url
