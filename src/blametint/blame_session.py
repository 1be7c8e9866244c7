from collections.abc import Sequence
from dataclasses import dataclass
from logging import getLogger

from blametint.blame_parser import BlameParser, ChangeRecord, ParseFailure
from blametint.blame_reader import BlameReader
from blametint.color_index import ColorIndex
from blametint.typedefs import OID, BlameStr, ColorToken, FileStr, LineNr

logger = getLogger(__name__)


# Result of blaming one file. A session is never updated, a refresh replaces it.
@dataclass(frozen=True)
class BlameSession:
    fstr: FileStr
    records: tuple[ChangeRecord, ...]
    color_index: ColorIndex
    failures: tuple[ParseFailure, ...] = ()

    @classmethod
    def from_blame_str(
        cls, fstr: FileStr, blame_str: BlameStr, scale: Sequence[ColorToken]
    ) -> "BlameSession":
        parser = BlameParser()
        records = parser.parse(blame_str)
        return cls(
            fstr,
            tuple(records),
            ColorIndex.from_records(records, scale),
            tuple(parser.failures),
        )

    @property
    def is_empty(self) -> bool:
        return not self.records

    def record_for_line(self, line_nr: LineNr) -> ChangeRecord | None:
        # If more than one record claims the line, the first one seen by the parser
        # wins.
        for record in self.records:
            if line_nr in record.lines:
                return record
        return None

    def latest_commit_oid(self) -> OID | None:
        """
        Return the OID of the most recent commit, skipping uncommitted lines. None if
        there are only uncommitted lines.
        """
        committed = [record for record in self.records if not record.is_uncommitted]
        if not committed:
            return None
        return max(committed, key=lambda record: record.timestamp).oid

    # Used to align the author column.
    def max_author_length(self) -> int:
        return max((len(record.author) for record in self.records), default=0)


class BlameSessions:
    """
    Registry of the blame sessions of the open files. A session is created on open,
    replaced on refresh and removed on close.
    """

    def __init__(self, reader: BlameReader, scale: Sequence[ColorToken]):
        self.reader: BlameReader = reader
        self.scale: list[ColorToken] = list(scale)
        self.fstr2session: dict[FileStr, BlameSession] = {}

    # Raises BlameCommandError if git blame cannot be run. Returns None when the blame
    # has no results, in which case the file is not registered.
    def open(self, fstr: FileStr) -> BlameSession | None:
        blame_str: BlameStr = self.reader.get_blame_str(fstr)
        session = BlameSession.from_blame_str(fstr, blame_str, self.scale)
        if session.is_empty:
            logger.info(f"Empty blame for {fstr}")
            self.fstr2session.pop(fstr, None)
            return None
        logger.info(
            f"Blame for {fstr}: {len(session.records)} commits, "
            f"{len(session.failures)} parse failures"
        )
        self.fstr2session[fstr] = session
        return session

    def refresh(self, fstr: FileStr) -> BlameSession | None:
        return self.open(fstr)

    def close(self, fstr: FileStr) -> None:
        if self.fstr2session.pop(fstr, None) is not None:
            logger.info(f"Closed blame for {fstr}")

    def toggle(self, fstr: FileStr) -> BlameSession | None:
        if fstr in self.fstr2session:
            self.close(fstr)
            return None
        return self.open(fstr)

    def get(self, fstr: FileStr) -> BlameSession | None:
        return self.fstr2session.get(fstr)

    def close_all(self) -> None:
        self.fstr2session.clear()

    def __contains__(self, fstr: object) -> bool:
        return fstr in self.fstr2session

    def __len__(self) -> int:
        return len(self.fstr2session)
