URL_PREFIXES = ("http://", "https://")

# hosts of the video conferencing services we recognise in descriptions
MEETING_HOSTS = ("zoom.", "teams.", "meet.google.", "webex.")


def extract_meeting_link(event):
    """
    Return the best-guess join URL for an event, or "" if there is none.

    Checked in order: a "video" conference entry, a URL in the location,
    then the first URL on a description line that mentions a meeting host.
    Links found in the description come back lowercased.
    """
    for entry in event.conference_entries:
        if entry.type == "video":
            return entry.uri

    if event.location and event.location.startswith(URL_PREFIXES):
        return event.location

    if event.description:
        for line in event.description.lower().split("\n"):
            if any(host in line for host in MEETING_HOSTS):
                for word in line.split():
                    if word.startswith(URL_PREFIXES):
                        return word

    return ""
