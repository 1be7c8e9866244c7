"""
Per-line annotations of a blamed file: the text in front of each line, its background
color by age and the hover text with the commit details.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path

from blametint.blame_parser import ChangeRecord
from blametint.blame_session import BlameSession
from blametint.constants import NBSP, THIN_SPACE, UNCOMMITTED_LABEL
from blametint.typedefs import Author, ColorToken, LineNr, Timestamp

TZ_OFFSET_PATTERN = re.compile(r"^([+-])(\d{2})(\d{2})$")


@dataclass
class LineAnnotation:
    line_nr: LineNr
    text: str
    background_color: ColorToken
    italic: bool  # uncommitted line
    bold: bool  # line of the latest commit
    hover: str | None  # markdown, None for uncommitted lines


def get_timezone(tz_offset: str) -> timezone:
    # "+0200" -> UTC+02:00, unknown formats fall back to UTC
    match = TZ_OFFSET_PATTERN.match(tz_offset)
    if match is None:
        return timezone.utc
    sign, hours, minutes = match.groups()
    delta = timedelta(hours=int(hours), minutes=int(minutes))
    return timezone(-delta if sign == "-" else delta)


def get_gmt_label(tz: timezone) -> str:
    offset = tz.utcoffset(None)
    if not offset:
        return "GMT"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    hours, minutes = divmod(minutes, 60)
    return f"GMT{sign}{hours}" + (f":{minutes:02}" if minutes else "")


def to_datetime(timestamp: Timestamp, tz_offset: str) -> datetime:
    return datetime.fromtimestamp(timestamp / 1000, get_timezone(tz_offset))


# 30.05.99
def format_date_short(timestamp: Timestamp, tz_offset: str = "") -> str:
    return to_datetime(timestamp, tz_offset).strftime("%d.%m.%y")


# Monday, 17 June 2024 at 14:04:31 GMT+2
def format_date_long(timestamp: Timestamp, tz_offset: str = "") -> str:
    date = to_datetime(timestamp, tz_offset)
    return (
        f"{date:%A}, {date.day} {date:%B %Y} at {date:%H:%M:%S} "
        f"{get_gmt_label(date.tzinfo)}"  # type: ignore
    )


def get_annotation_text(
    author: Author, timestamp: Timestamp, tz_offset: str, max_author_length: int
) -> str:
    return "".join(
        [
            THIN_SPACE,
            format_date_short(timestamp, tz_offset),
            " ",
            author.ljust(max_author_length, NBSP),
            THIN_SPACE,
        ]
    )


def get_hover_text(record: ChangeRecord, repo_url: str, fstr: str = "") -> str:
    oid_link = (
        f"[{record.oid}]({repo_url}/commit/{record.oid})" if repo_url else record.oid
    )
    hover = (
        f"**Commit:** {oid_link}<br>\n"
        f"**Author:** {record.author} <<{record.email}>><br>\n"
        f"**Date:** {format_date_long(record.timestamp, record.tz_offset)}"
    )
    if record.filename and fstr and not _is_same_file(record.filename, fstr):
        hover += f"<br>\n**File:** {record.filename}"
    return hover + f"\n\n{record.summary}\n"


def _is_same_file(filename: str, fstr: str) -> bool:
    # filename is relative to the work tree, fstr may be absolute
    filename_parts = Path(filename).parts
    return Path(fstr).parts[-len(filename_parts) :] == filename_parts


def get_line_annotations(
    session: BlameSession, line_count: int, repo_url: str = ""
) -> list[LineAnnotation]:
    annotations: list[LineAnnotation] = []
    max_author_length = session.max_author_length()
    latest_oid = session.latest_commit_oid()

    for line_nr in range(1, line_count + 1):
        record = session.record_for_line(line_nr)
        if record is None:
            continue
        is_uncommitted = record.is_uncommitted
        annotations.append(
            LineAnnotation(
                line_nr,
                get_annotation_text(
                    UNCOMMITTED_LABEL if is_uncommitted else record.author,
                    record.timestamp,
                    record.tz_offset,
                    max_author_length,
                ),
                session.color_index.color_for(record.timestamp),
                italic=is_uncommitted,
                bold=not is_uncommitted and record.oid == latest_oid,
                hover=(
                    None
                    if is_uncommitted
                    else get_hover_text(record, repo_url, session.fstr)
                ),
            )
        )
    return annotations
