"""Render a RangeReport as a CSV sheet.

The layout follows the spreadsheet the attendance screen used to build on
the client: a title line, an info line, a blank line, then the table.
"""
from __future__ import annotations

import csv
import io

from ..common.datetime_utils import format_iso_date
from ..core.constants import DEFAULT_EXPORT_LOCALE, SUPPORTED_LOCALES
from ..core.enums import ReportCell
from .model import RangeReport

LABELS: dict[str, dict[str, str]] = {
    "en": {
        "title": "Student attendance",
        "date": "Date",
        "period": "Period",
        "to": "to",
        "section": "Section",
        "teacher": "Teacher",
        "index": "#",
        "name": "Name",
        "national_id": "National ID",
        "school": "School",
        "present_total": "Present",
        "absent_total": "Absent",
        ReportCell.PRESENT.value: "Present",
        ReportCell.ABSENT.value: "Absent",
        ReportCell.NO_DATA.value: "-",
    },
    "ar": {
        "title": "حضور الطلاب",
        "date": "التاريخ",
        "period": "الفترة",
        "to": "إلى",
        "section": "القسم",
        "teacher": "المعلم",
        "index": "#",
        "name": "الاسم",
        "national_id": "رقم الهوية",
        "school": "المدرسة",
        "present_total": "حاضر",
        "absent_total": "غائب",
        ReportCell.PRESENT.value: "حاضر",
        ReportCell.ABSENT.value: "غائب",
        ReportCell.NO_DATA.value: "-",
    },
}


def resolve_locale(locale: str | None) -> str:
    locale = (locale or "").strip().lower()
    return locale if locale in SUPPORTED_LOCALES else DEFAULT_EXPORT_LOCALE


def report_filename(report: RangeReport) -> str:
    # Cohort ids look like "E#00001"; '#' is not safe in a download name.
    safe_id = "".join(ch if ch.isalnum() or ch in "-_" else "" for ch in report.cohort.cohort_id)
    if report.is_single_day:
        return f"attendance_{safe_id}_{format_iso_date(report.start)}.csv"
    return f"attendance_{safe_id}_{format_iso_date(report.start)}_{format_iso_date(report.end)}.csv"


def report_to_table(report: RangeReport, *, locale: str = DEFAULT_EXPORT_LOCALE) -> list[list[object]]:
    t = LABELS[resolve_locale(locale)]

    if report.is_single_day:
        when = f"{t['date']}: {format_iso_date(report.start)}"
    else:
        when = f"{t['period']}: {format_iso_date(report.start)} {t['to']} {format_iso_date(report.end)}"

    table: list[list[object]] = [
        [f"{t['title']} - {report.cohort.cohort_id}"],
        [when, f"{t['section']}: {report.cohort.section}", f"{t['teacher']}: {report.cohort.teacher_name}"],
        [],
    ]

    header: list[object] = [t["index"], t["name"], t["national_id"], t["school"]]
    header.extend(format_iso_date(d) for d in report.dates)
    if not report.is_single_day:
        header.extend([t["present_total"], t["absent_total"]])
    table.append(header)

    for i, row in enumerate(report.rows, start=1):
        line: list[object] = [i, row.full_name, row.national_id, row.school_name]
        line.extend(t[c.value] for c in row.cells)
        if not report.is_single_day:
            line.extend([row.present_count, row.absent_count])
        table.append(line)

    return table


def write_report_csv(report: RangeReport, *, locale: str = DEFAULT_EXPORT_LOCALE) -> bytes:
    out = io.StringIO()
    writer = csv.writer(out)
    writer.writerows(report_to_table(report, locale=locale))
    # BOM so spreadsheet apps pick up UTF-8 (Arabic names and labels).
    return out.getvalue().encode("utf-8-sig")
