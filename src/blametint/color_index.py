from collections.abc import Iterable, Sequence
from logging import getLogger

from blametint.blame_parser import ChangeRecord
from blametint.constants import NO_COLOR
from blametint.typedefs import ColorToken, Timestamp

logger = getLogger(__name__)


def index_colors(
    records: Iterable[ChangeRecord], scale: Sequence[ColorToken]
) -> dict[Timestamp, ColorToken]:
    """
    Map the distinct timestamps of the records to the colors of the scale, the most
    recent timestamp to scale[0], the next one to scale[1], and so on. Timestamps
    beyond the length of the scale are left out of the result.
    """
    # dict.fromkeys keeps the first-seen order of equal timestamps, so that the
    # stable sort below is deterministic for a given input order.
    distinct_timestamps: list[Timestamp] = list(
        dict.fromkeys(record.timestamp for record in records)
    )
    sorted_timestamps = sorted(distinct_timestamps, reverse=True)
    timestamp2color: dict[Timestamp, ColorToken] = {}
    for i, timestamp in enumerate(sorted_timestamps):
        if i >= len(scale):
            break
        timestamp2color[timestamp] = scale[i]
    logger.debug(
        f"Indexed {len(timestamp2color)} of {len(sorted_timestamps)} dates "
        f"with a scale of {len(scale)} colors"
    )
    return timestamp2color


class ColorIndex:
    def __init__(self, timestamp2color: dict[Timestamp, ColorToken] | None = None):
        self.timestamp2color: dict[Timestamp, ColorToken] = (
            timestamp2color if timestamp2color is not None else {}
        )

    @classmethod
    def from_records(
        cls, records: Iterable[ChangeRecord], scale: Sequence[ColorToken]
    ) -> "ColorIndex":
        return cls(index_colors(records, scale))

    # Timestamps older than the scale and unknown timestamps both get NO_COLOR.
    def color_for(self, timestamp: Timestamp) -> ColorToken:
        return self.timestamp2color.get(timestamp, NO_COLOR)

    def __contains__(self, timestamp: object) -> bool:
        return timestamp in self.timestamp2color

    def __len__(self) -> int:
        return len(self.timestamp2color)

    def __repr__(self) -> str:
        return f"ColorIndex({self.timestamp2color!r})"
