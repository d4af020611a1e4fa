"""File bridge to the learning-management system.

Reads the LMS roster export and writes the participation grade upload.
"""

import csv
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TextIO
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from rollcall.core.config import ExportRound, get_settings
from rollcall.services.roster import RosterEntry, list_students
from rollcall.services.scoring import PointPolicy, policy_from_settings
from rollcall.services.summary import SummaryAggregator, compute_totals

logger = logging.getLogger(__name__)

TOTAL_COLUMN_LABEL = "Participation"


def read_roster(path: str | Path, encoding: str | None = None, delimiter: str | None = None) -> list[RosterEntry]:
    """Parse ``last name, first name, username, student id`` rows after a header line."""
    settings = get_settings()
    entries: list[RosterEntry] = []
    with open(path, encoding=encoding or settings.roster_encoding, newline="") as fh:
        reader = csv.reader(fh, delimiter=delimiter or settings.roster_delimiter)
        next(reader, None)
        for row in reader:
            fields = [value.strip().lstrip("\ufeff") for value in row]
            if len(fields) < 4:
                continue
            last_name, first_name, username, roster_number = fields[:4]
            if not roster_number:
                continue
            entries.append(RosterEntry(roster_number=roster_number, name=f"{first_name} {last_name}", username=username))
    logger.info("Read %s roster entries from %s", len(entries), path)
    return entries


@dataclass
class ExportColumn:
    label: str
    column_id: str | None = None
    points: dict[int, int] = field(default_factory=dict)

    @property
    def max_points(self) -> int:
        return max(self.points.values(), default=0)

    @property
    def header(self) -> str:
        header = f"{self.label} [Total Pts: {self.max_points} Score]"
        return f"{header} |{self.column_id}" if self.column_id else header


@dataclass
class ExportTable:
    usernames: dict[int, str]
    columns: list[ExportColumn]


def _as_utc(value: datetime, tz: ZoneInfo) -> datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=tz)
    return value.astimezone(ZoneInfo("UTC"))


def build_export(
    db: Session,
    rounds: list[ExportRound] | None = None,
    policy: PointPolicy | None = None,
) -> ExportTable:
    settings = get_settings()
    rounds = settings.export_rounds if rounds is None else rounds
    policy = policy or policy_from_settings(settings)

    aggregator = SummaryAggregator(db, policy=policy)
    aggregator.refresh_all()
    summary = {entry.student_id: entry.points for entry in aggregator.get_summary()}
    usernames = {student.id: student.username for student in list_students(db)}

    if not rounds:
        column = ExportColumn(label=TOTAL_COLUMN_LABEL)
        column.points = {student_id: summary.get(student_id, 0) for student_id in usernames}
        return ExportTable(usernames=usernames, columns=[column])

    columns = []
    since = None
    for export_round in sorted(rounds, key=lambda item: _as_utc(item.ends_at, settings.tzinfo)):
        until = _as_utc(export_round.ends_at, settings.tzinfo)
        totals = compute_totals(db, policy, since=since, until=until)
        column = ExportColumn(label=export_round.label, column_id=export_round.column_id)
        column.points = {student_id: totals.get(student_id, 0) for student_id in usernames}
        columns.append(column)
        since = until
    return ExportTable(usernames=usernames, columns=columns)


def write_export(table: ExportTable, fh: TextIO) -> int:
    """Write the tab-separated grade upload; returns the number of student rows."""
    header = ["\"Username\""] + [f"\"{column.header}\"" for column in table.columns]
    fh.write("\t".join(header) + "\n")
    for student_id, username in table.usernames.items():
        values = [str(column.points.get(student_id, 0)) for column in table.columns]
        fh.write("\t".join([f"\"{username}\""] + values) + "\n")
    return len(table.usernames)
