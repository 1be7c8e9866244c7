from pathlib import Path

import pytest
from git import Actor, Repo

from blametint.args_settings import SettingsFile

ALICE = Actor("Alice", "alice@example.com")
BOB = Actor("Bob Builder", "bob@example.com")


@pytest.fixture(autouse=True)
def settings_dir(tmp_path, monkeypatch):
    """Keep the settings and settings location files out of the user config dir."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    initial_path = config_dir / SettingsFile.SETTINGS_FILE_NAME
    monkeypatch.setattr(
        SettingsFile,
        "SETTINGS_LOCATION_PATH",
        config_dir / SettingsFile.SETTINGS_LOCATION_FILE_NAME,
    )
    monkeypatch.setattr(SettingsFile, "INITIAL_SETTINGS_PATH", initial_path)
    monkeypatch.setattr(
        SettingsFile,
        "DEFAULT_LOCATION_SETTINGS",
        {"settings_location": initial_path.as_posix()},
    )
    return config_dir


@pytest.fixture
def git_repo(tmp_path):
    repo = Repo.init(tmp_path / "repo")
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Tester")
        writer.set_value("user", "email", "tester@example.com")
    yield repo
    repo.close()


@pytest.fixture
def commit_file(git_repo):
    """Write a file into the test repo and commit it, return the commit OID."""

    def _commit_file(
        fstr: str,
        text: str,
        author: Actor = ALICE,
        seconds: int = 1718625871,
        message: str = "Change",
        tz_offset: str = "+0200",
    ) -> str:
        path = Path(git_repo.working_tree_dir) / fstr
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        git_repo.index.add([fstr])
        date = f"{seconds} {tz_offset}"
        commit = git_repo.index.commit(
            message,
            author=author,
            committer=author,
            author_date=date,
            commit_date=date,
        )
        return commit.hexsha

    return _commit_file
