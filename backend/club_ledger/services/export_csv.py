"""CSV Export — renders a monthly ExportTable as a spreadsheet-friendly CSV.

Invariants:
    - Output starts with a UTF-8 BOM so spreadsheet apps detect the encoding
    - Header: name, track, one M/D column per day, attended total, no-show total
    - Row order follows the table (roster order, offline row before online)
"""

import csv
import io

from club_ledger.core.domain_types import Track
from club_ledger.core.export_table import ExportTable

BOM = "\ufeff"

TRACK_LABELS: dict[Track, str] = {
    Track.OFFLINE: "Offline",
    Track.ONLINE: "Online",
}


def render_export_csv(table: ExportTable) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    day_columns = [f"{table.month}/{int(day[-2:])}" for day in table.days]
    writer.writerow(["Member", "Track", *day_columns, "Attended", "No-show"])
    for row in table.rows:
        writer.writerow([
            row.name,
            TRACK_LABELS[row.track],
            *row.daily_attended,
            row.total_attended,
            row.total_no_show,
        ])
    return BOM + buffer.getvalue()


def export_filename(year: int, month: int) -> str:
    return f"club_attendance_{year}_{month:02d}.csv"
