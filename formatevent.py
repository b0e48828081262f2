import datetime as dt
from durations import format_duration, round_duration
from meetinglink import extract_meeting_link

# field separator, must not occur in titles or links
SEPARATOR = " ยง "


def format_event(event, start_time, now):
    until_start = start_time - now
    if until_start > dt.timedelta(0):
        when = f"starts in {format_duration(round_duration(until_start))}"
    else:
        when = f"started {format_duration(round_duration(now - start_time))} ago"

    return SEPARATOR.join([event.title, when, extract_meeting_link(event)])
