"""CSV export of registrations."""
import csv
import io
from typing import Iterable

from src.models.attendee import Attendee

CSV_FILENAME = "ekathra_registrations.csv"
CSV_MIME = "text/csv"
CSV_HEADER = ("Name", "Phone", "Receipt ID")


def export_csv(attendees: Iterable[Attendee]) -> str:
    """
    Render attendees as CSV text.

    Fields containing commas, quotes or line breaks are quoted, so
    `A,B` becomes `"A,B"`. Rows are separated by `\\n` with no trailing
    newline, and the header is always present.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for attendee in attendees:
        writer.writerow((attendee.name, attendee.phone, attendee.id))
    return buffer.getvalue().rstrip("\n")
