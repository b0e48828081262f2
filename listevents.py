import os
import sys
import logging
import argparse
import datetime as dt
import httplib2
import pytz
from dotenv import load_dotenv
from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import Error as GoogleApiError
from googleapiclient.errors import HttpError
from calendarevent import Event
from durations import InvalidDurationError, parse_duration
from filterevents import DEFAULT_DURATION, select_relevant, window_bounds
from formatevent import format_event
from tools import TokenError, get_google_service

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/calendar.readonly"]

load_dotenv()
CREDENTIALS_FILE = os.getenv("CALENDAR_CREDENTIALS_FILE", "/tmp/credentials.json")
TOKEN_FILE = os.getenv("CALENDAR_TOKEN_FILE", "/tmp/token.json")
CALENDAR_ID = os.getenv("CALENDAR_ID", "primary")
OAUTH_PORT = int(os.getenv("CALENDAR_OAUTH_PORT") or 8080)
OAUTH_TIMEOUT = int(os.getenv("CALENDAR_OAUTH_TIMEOUT") or 300)
TIMEZONE = os.getenv("CALENDAR_TIMEZONE") or None


def current_time(tz_name=None):
    if tz_name:
        return dt.datetime.now(pytz.timezone(tz_name))
    return dt.datetime.now().astimezone()


def fetch_events(service, time_min, time_max, calendar_id="primary"):
    """Fetch every event in [time_min, time_max], following pagination."""
    items = []
    page_token = None
    while True:
        events_result = (service.events()
                         .list(calendarId=calendar_id,
                               timeMin=time_min.isoformat(),
                               timeMax=time_max.isoformat(),
                               singleEvents=True,
                               orderBy="startTime",
                               pageToken=page_token)
                         .execute())
        page = events_result.get("items", [])
        logger.debug("Fetched %d events from %s", len(page), calendar_id)
        items.extend(page)
        page_token = events_result.get("nextPageToken")
        if not page_token:
            break
    return [Event.from_api(item) for item in items]


def build_parser():
    parser = argparse.ArgumentParser(
        prog="list-meetings",
        description="List calendar events around the current time with their meeting links.",
    )
    parser.add_argument("--next", default="",
                        help="Show events within the specified duration (e.g., 5m, 1h)")
    parser.add_argument("--calendar", default=CALENDAR_ID, help="Calendar ID to read")
    parser.add_argument("--credentials", default=CREDENTIALS_FILE,
                        help="OAuth client secrets JSON file")
    parser.add_argument("--token", default=TOKEN_FILE, help="Where the OAuth token is cached")
    parser.add_argument("--port", type=int, default=OAUTH_PORT,
                        help="Local port for the authorization callback")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.next:
        try:
            duration = parse_duration(args.next)
        except InvalidDurationError as e:
            print(f"Invalid duration format: {e}")
            return 1
        if duration < dt.timedelta(0):
            print(f"Invalid duration format: negative duration {args.next!r}")
            return 1
    else:
        duration = DEFAULT_DURATION

    try:
        now = current_time(TIMEZONE)
    except pytz.UnknownTimeZoneError as e:
        print(f"Unknown time zone: {e}")
        return 1

    try:
        time_min, time_max = window_bounds(now, duration)
    except OverflowError as e:
        print(f"Invalid duration format: {e}")
        return 1

    try:
        service = get_google_service(
            api_name="calendar",
            api_version="v3",
            scopes=SCOPES,
            credentials_file=args.credentials,
            token_file=args.token,
            port=args.port,
            timeout_seconds=OAUTH_TIMEOUT,
        )
    except TokenError as e:
        print(f"Unable to retrieve token: {e}")
        return 1
    except OSError as e:
        print(f"Unable to read credentials file: {e}")
        return 1
    except ValueError as e:
        print(f"Unable to parse credentials: {e}")
        return 1
    except GoogleApiError as e:
        print(f"Unable to create Calendar service: {e}")
        return 1

    logger.debug("Querying %s between %s and %s", args.calendar, time_min, time_max)
    try:
        events = fetch_events(service, time_min, time_max, calendar_id=args.calendar)
    except (HttpError, GoogleAuthError, httplib2.HttpLib2Error, OSError) as e:
        print(f"Unable to retrieve events: {e}")
        return 1

    relevant = select_relevant(events, now, duration)
    if not relevant:
        if args.next:
            print(f"No events found within {args.next} of current time")
        else:
            print("No events found today")
        return 0

    for event in relevant:
        print(format_event(event, event.start_time, now))
    return 0


if __name__ == "__main__":
    sys.exit(main())
