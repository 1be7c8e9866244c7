"""Tests for blame sessions, their derived queries and the session registry."""

import pytest

from blametint.blame_parser import ChangeRecord
from blametint.blame_reader import BlameCommandError
from blametint.blame_session import BlameSession, BlameSessions
from blametint.color_index import ColorIndex
from blametint.constants import UNCOMMITTED_AUTHOR

SCALE = ["#c0", "#c1"]

OID_A = "a" * 40
OID_B = "b" * 40
OID_NEW = "0" * 40

BLAME_STR = (
    f"{OID_A} 1 1 1\n"
    "author Alice\n"
    "author-time 100\n"
    "summary First\n"
    "\tone\n"
    f"{OID_B} 1 2 1\n"
    "author Bob Builder\n"
    "author-time 200\n"
    "summary Second\n"
    "\ttwo\n"
)


def _session(*records: ChangeRecord) -> BlameSession:
    return BlameSession("app.py", records, ColorIndex.from_records(records, SCALE))


class TestBlameSession:
    def test_from_blame_str(self):
        session = BlameSession.from_blame_str("app.py", BLAME_STR, SCALE)
        assert not session.is_empty
        assert [r.oid for r in session.records] == [OID_A, OID_B]
        assert session.color_index.color_for(200_000) == "#c0"
        assert session.failures == ()

    def test_from_blame_str_collects_failures(self):
        session = BlameSession.from_blame_str("app.py", BLAME_STR + "junk\n", SCALE)
        assert len(session.records) == 2
        assert len(session.failures) == 1

    def test_empty_blame(self):
        session = BlameSession.from_blame_str("app.py", "", SCALE)
        assert session.is_empty
        assert len(session.color_index) == 0
        assert session.failures == ()
        assert session.latest_commit_oid() is None
        assert session.max_author_length() == 0

    def test_record_for_line(self):
        session = BlameSession.from_blame_str("app.py", BLAME_STR, SCALE)
        assert session.record_for_line(1).oid == OID_A  # type: ignore
        assert session.record_for_line(2).oid == OID_B  # type: ignore
        assert session.record_for_line(3) is None

    def test_record_for_line_claimed_twice_returns_first(self):
        session = _session(
            ChangeRecord(OID_B, lines=[1, 2]), ChangeRecord(OID_A, lines=[2])
        )
        assert session.record_for_line(2).oid == OID_B  # type: ignore

    def test_latest_commit(self):
        session = BlameSession.from_blame_str("app.py", BLAME_STR, SCALE)
        assert session.latest_commit_oid() == OID_B

    def test_latest_commit_skips_uncommitted(self):
        session = _session(
            ChangeRecord(OID_A, lines=[1], author="Alice", timestamp=100),
            ChangeRecord(OID_NEW, lines=[2], author=UNCOMMITTED_AUTHOR, timestamp=900),
            ChangeRecord(OID_B, lines=[3], author="Bob", timestamp=200),
        )
        assert session.latest_commit_oid() == OID_B

    def test_latest_commit_skips_uncommitted_with_zero_date(self):
        session = _session(
            ChangeRecord(OID_NEW, lines=[1], author=UNCOMMITTED_AUTHOR, timestamp=0),
            ChangeRecord(OID_A, lines=[2], author="Alice", timestamp=0),
        )
        assert session.latest_commit_oid() == OID_A

    def test_no_latest_commit_when_all_uncommitted(self):
        session = _session(
            ChangeRecord(OID_NEW, lines=[1], author=UNCOMMITTED_AUTHOR, timestamp=900)
        )
        assert session.latest_commit_oid() is None

    def test_max_author_length(self):
        session = BlameSession.from_blame_str("app.py", BLAME_STR, SCALE)
        assert session.max_author_length() == len("Bob Builder")


class FakeReader:
    def __init__(self, fstr2blame_str: dict[str, str]):
        self.fstr2blame_str = fstr2blame_str
        self.calls: list[str] = []

    def get_blame_str(self, fstr: str) -> str:
        self.calls.append(fstr)
        if fstr not in self.fstr2blame_str:
            raise BlameCommandError(f"{fstr} is not in a git repository")
        return self.fstr2blame_str[fstr]


class TestBlameSessions:
    def test_open_registers_session(self):
        reader = FakeReader({"app.py": BLAME_STR})
        sessions = BlameSessions(reader, SCALE)  # type: ignore
        session = sessions.open("app.py")
        assert session is not None
        assert "app.py" in sessions
        assert sessions.get("app.py") is session

    def test_empty_blame_is_not_registered(self):
        sessions = BlameSessions(FakeReader({"empty.py": ""}), SCALE)  # type: ignore
        assert sessions.open("empty.py") is None
        assert "empty.py" not in sessions
        assert len(sessions) == 0

    def test_refresh_replaces_session(self):
        reader = FakeReader({"app.py": BLAME_STR})
        sessions = BlameSessions(reader, SCALE)  # type: ignore
        first = sessions.open("app.py")
        second = sessions.refresh("app.py")
        assert second is not first
        assert sessions.get("app.py") is second
        assert reader.calls == ["app.py", "app.py"]

    def test_refresh_to_empty_removes_session(self):
        reader = FakeReader({"app.py": BLAME_STR})
        sessions = BlameSessions(reader, SCALE)  # type: ignore
        sessions.open("app.py")
        reader.fstr2blame_str["app.py"] = ""
        assert sessions.refresh("app.py") is None
        assert "app.py" not in sessions

    def test_close(self):
        reader = FakeReader({"app.py": BLAME_STR})
        sessions = BlameSessions(reader, SCALE)  # type: ignore
        sessions.open("app.py")
        sessions.close("app.py")
        assert sessions.get("app.py") is None
        sessions.close("app.py")  # closing twice is fine

    def test_toggle(self):
        reader = FakeReader({"app.py": BLAME_STR})
        sessions = BlameSessions(reader, SCALE)  # type: ignore
        assert sessions.toggle("app.py") is not None
        assert sessions.toggle("app.py") is None
        assert "app.py" not in sessions

    def test_sessions_are_independent(self):
        reader = FakeReader({"a.py": BLAME_STR, "b.py": BLAME_STR})
        sessions = BlameSessions(reader, SCALE)  # type: ignore
        a = sessions.open("a.py")
        b = sessions.open("b.py")
        assert a is not None and b is not None
        assert a.records[0] is not b.records[0]
        sessions.close_all()
        assert len(sessions) == 0

    def test_reader_error_propagates(self):
        sessions = BlameSessions(FakeReader({}), SCALE)  # type: ignore
        with pytest.raises(BlameCommandError):
            sessions.open("missing.py")
        assert "missing.py" not in sessions
