import re
import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

# RFC 3339 requires an explicit offset; naive timestamps are rejected
_RFC3339 = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)


@dataclass(frozen=True)
class ConferenceEntry:
    type: str = ""
    uri: str = ""


@dataclass(frozen=True)
class Event:
    title: str = ""
    start_time: Optional[dt.datetime] = None
    location: str = ""
    description: str = ""
    conference_entries: Tuple[ConferenceEntry, ...] = field(default_factory=tuple)

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "Event":
        """
        Build an Event from one Google Calendar events.list item.

        All-day events only carry start.date, so their start_time is None.
        """
        start = (item.get("start") or {}).get("dateTime")
        conference = item.get("conferenceData") or {}
        entries = tuple(
            ConferenceEntry(
                type=ep.get("entryPointType") or "",
                uri=ep.get("uri") or "",
            )
            for ep in conference.get("entryPoints") or []
        )
        return cls(
            title=item.get("summary") or "",
            start_time=parse_event_time(start),
            location=item.get("location") or "",
            description=item.get("description") or "",
            conference_entries=entries,
        )


def parse_event_time(value):
    """Parse an RFC 3339 timestamp into an aware datetime, or None."""
    if not value or not isinstance(value, str):
        return None
    m = _RFC3339.match(value)
    if not m:
        return None

    text = value
    if text[-1] in "Zz":
        text = text[:-1] + "+00:00"
    # fromisoformat before 3.11 only takes 3 or 6 fractional digits
    frac = m.group(1)
    if frac:
        digits = frac[1:7].ljust(6, "0")
        text = text.replace(frac, "." + digits, 1)
    try:
        return dt.datetime.fromisoformat(text.replace("t", "T", 1))
    except ValueError:
        return None
