"""
Parser for the output of git blame --porcelain.

The porcelain format consists of one entry per line of the blamed file. Each entry
starts with a header line:

    <40-hex OID> <source line> <result line> [<number of lines in group>]

The first time an OID appears, the header is followed by a block of commit info lines
of the form "<key> <value>", e.g. "author John Doe" or "author-time 1718625871".
Every entry ends with the content line itself, which starts with a tab.

Example:

    49790775624c422f67057f7bb936f35df920e391 94 120 3
    author John Doe
    author-mail <john@example.com>
    author-time 1718625871
    author-tz +0200
    summary Fix the frobnicator
    filename src/frob.py
    \tdef frobnicate():
    49790775624c422f67057f7bb936f35df920e391 95 121
    \t    pass

Parsing never raises: lines that cannot be parsed are logged, collected in
BlameParser.failures and skipped.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from logging import getLogger

from blametint.constants import UNCOMMITTED_AUTHOR
from blametint.typedefs import (
    OID,
    SHA,
    Author,
    BlameStr,
    Email,
    FileStr,
    LineNr,
    Timestamp,
)

logger = getLogger(__name__)

HEADER_PATTERN = re.compile(r"^([0-9a-f]{40})\s(\d+)\s(\S+)(?:\s(\d+))?\s?$")

# ASCII only, str.isdigit() also accepts digits such as "²" that int() rejects.
RESULT_LINE_NR_PATTERN = re.compile(r"[0-9]+")

# Commit info line, the value is absent for flags such as "boundary".
INFO_PATTERN = re.compile(r"^([a-z][a-z-]*)(?:\s(.*))?$")

MALFORMED_HEADER = "malformed header line"
UNPARSABLE_LINE_NUMBER = "unparsable result line number"
UNPARSABLE_AUTHOR_TIME = "unparsable author-time"


@dataclass
class ChangeRecord:
    oid: OID
    lines: list[LineNr] = field(default_factory=list)
    author: Author = ""
    email: Email = ""
    timestamp: Timestamp = 0
    tz_offset: str = ""  # as given by git, e.g. "+0200"
    summary: str = ""
    # Path of the file in the commit, differs from the blamed file when git follows
    # copies or moves.
    filename: FileStr = ""

    @property
    def sha(self) -> SHA:
        return self.oid[:7]

    @property
    def is_uncommitted(self) -> bool:
        return self.author == UNCOMMITTED_AUTHOR


@dataclass
class ParseFailure:
    line_nr: int  # 1-based line number in the blame output, not in the blamed file
    line: str
    reason: str


class ParserState(Enum):
    EXPECT_HEADER = "expect_header"
    IN_METADATA = "in_metadata"


class BlameParser:
    def __init__(self) -> None:
        # Insertion order is the order in which the OIDs are first seen.
        self.oid2record: dict[OID, ChangeRecord] = {}
        self.failures: list[ParseFailure] = []

        # OIDs whose commit info has been set by a complete info block.
        self._described_oids: set[OID] = set()

    def parse(self, blame_str: BlameStr) -> list[ChangeRecord]:
        self.oid2record = {}
        self.failures = []
        self._described_oids = set()

        blame_str = blame_str.strip()
        if not blame_str:
            return []

        # Do not use splitlines(), which also splits on form feeds and other
        # characters that may occur inside the blamed code.
        lines: list[str] = blame_str.split("\n")

        state = ParserState.EXPECT_HEADER
        record: ChangeRecord | None = None
        result_line_nr: LineNr = 0
        info_found: bool = False
        i: int = 0
        while i < len(lines):
            line = lines[i]
            match state:
                case ParserState.EXPECT_HEADER:
                    header = HEADER_PATTERN.match(line)
                    if header is None:
                        self._add_failure(i, line, MALFORMED_HEADER)
                    elif not RESULT_LINE_NR_PATTERN.fullmatch(header.group(3)):
                        self._add_failure(i, line, UNPARSABLE_LINE_NUMBER)
                    else:
                        record = self._get_or_create(header.group(1))
                        result_line_nr = int(header.group(3))
                        info_found = False
                        state = ParserState.IN_METADATA
                    i += 1
                case ParserState.IN_METADATA:
                    assert record is not None
                    if HEADER_PATTERN.match(line):
                        # Entry without content line, do not consume the next header.
                        self._end_entry(record, result_line_nr, info_found)
                        state = ParserState.EXPECT_HEADER
                        continue
                    info = INFO_PATTERN.match(line)
                    if info:
                        key, value = info.group(1), info.group(2)
                        if self._set_info(record, key, value, i, line):
                            info_found = True
                    else:
                        # Content line, skipped exactly once.
                        self._end_entry(record, result_line_nr, info_found)
                        state = ParserState.EXPECT_HEADER
                    i += 1

        if state == ParserState.IN_METADATA:
            assert record is not None
            self._end_entry(record, result_line_nr, info_found)

        if self.failures:
            logger.warning(
                f"Git blame parsing: {len(self.failures)} lines could not be parsed"
            )
        return list(self.oid2record.values())

    def _get_or_create(self, oid: OID) -> ChangeRecord:
        if oid not in self.oid2record:
            self.oid2record[oid] = ChangeRecord(oid)
        return self.oid2record[oid]

    def _end_entry(
        self, record: ChangeRecord, result_line_nr: LineNr, info_found: bool
    ) -> None:
        record.lines.append(result_line_nr)
        if info_found:
            self._described_oids.add(record.oid)

    # Return True if key is a known commit info key.
    def _set_info(
        self, record: ChangeRecord, key: str, value: str | None, i: int, line: str
    ) -> bool:
        if key not in {"author", "author-mail", "author-time", "author-tz", "summary"}:
            if key == "filename" and value is not None and not record.filename:
                record.filename = value
            return False
        if record.oid in self._described_oids:
            logger.debug(f"Ignoring repeated commit info for {record.sha}: {line}")
            return True

        value = value if value is not None else ""
        match key:
            case "author":
                record.author = value
            case "author-mail":
                # Remove <...> from email
                record.email = value[1:-1]
            case "author-time":
                try:
                    # Convert seconds to milliseconds
                    record.timestamp = int(value) * 1000
                except ValueError:
                    self._add_failure(i, line, UNPARSABLE_AUTHOR_TIME)
            case "author-tz":
                record.tz_offset = value
            case "summary":
                record.summary = value
        return True

    def _add_failure(self, i: int, line: str, reason: str) -> None:
        logger.warning(f"Skip parsing line {i + 1}, {reason}: {line!r}")
        self.failures.append(ParseFailure(i + 1, line, reason))


def parse_blame(blame_str: BlameStr) -> list[ChangeRecord]:
    return BlameParser().parse(blame_str)
