from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_iso_date, parse_iso_date, today_local
from ..core.enums import ErrorKind
from ..core.exceptions import DomainError, ValidationError
from ..core.messages import message_for
from ..container import Container
from ..reports.csv_export import report_filename, resolve_locale, write_report_csv

logger = logging.getLogger(__name__)

STATUS_CODES = {
    ErrorKind.INVALID_REQUEST: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID_DATE: 400,
    ErrorKind.INVALID_RANGE: 400,
    ErrorKind.INVALID_STATUS: 400,
    ErrorKind.UNKNOWN_STUDENT: 422,
}


def register(app: Flask, container: Container) -> None:
    def _error(e: DomainError):
        body = {
            "success": False,
            "kind": e.kind.value,
            "message": message_for(e.kind, "en"),
            "messageAr": message_for(e.kind, "ar"),
            "detail": str(e),
        }
        body.update(e.detail)
        return jsonify(body), STATUS_CODES.get(e.kind, 400)

    def _server_error(action: str):
        logger.exception("Unexpected error while %s", action)
        return jsonify({
            "success": False,
            "message": "Server error",
            "messageAr": "خطأ في الخادم",
        }), 500

    def _parse_records(payload: dict) -> dict[str, object]:
        records = payload.get("records")
        if not isinstance(records, list):
            raise ValidationError("records must be a list")

        edits: dict[str, object] = {}
        for item in records:
            if not isinstance(item, dict) or "studentId" not in item:
                raise ValidationError("each record needs studentId and status")
            edits[str(item["studentId"])] = item.get("status")
        return edits

    def _range_args():
        start = parse_iso_date(request.args.get("startDate"), "startDate")
        end_s = request.args.get("endDate")
        end = parse_iso_date(end_s, "endDate") if end_s else start
        return start, end

    @app.route("/api/education/<cohort_id>/verify", methods=["GET"], endpoint="education_verify")
    def education_verify(cohort_id: str):
        try:
            cohort = container.cohort_directory.resolve_cohort(cohort_id)
            return jsonify({
                "educationId": cohort.cohort_id,
                "section": cohort.section_label,
                "teacherName": cohort.teacher_name,
                "periodStartDate": format_iso_date(cohort.period_start_date),
                "periodEndDate": format_iso_date(cohort.period_end_date),
                "periodStartTime": cohort.period_start_time.strftime("%H:%M") if cohort.period_start_time else None,
                "periodEndTime": cohort.period_end_time.strftime("%H:%M") if cohort.period_end_time else None,
                "status": cohort.status.value,
            })
        except DomainError as e:
            return _error(e)
        except Exception:
            return _server_error("verifying education")

    @app.route("/api/education/<cohort_id>/students", methods=["GET"], endpoint="education_students")
    def education_students(cohort_id: str):
        try:
            cohort = container.cohort_directory.resolve_cohort(cohort_id)
            students = container.roster.list_active_enrollments(cohort.cohort_id)
            return jsonify([
                {
                    "studentId": s.student_id,
                    "fullName": s.full_name,
                    "nationalId": s.national_id,
                    "schoolName": s.school_name,
                    "educationLevel": s.education_level,
                }
                for s in students
            ])
        except DomainError as e:
            return _error(e)
        except Exception:
            return _server_error("listing students")

    @app.route("/api/education/<cohort_id>/attendance", methods=["GET"], endpoint="attendance_get")
    def attendance_get(cohort_id: str):
        try:
            day = parse_iso_date(request.args.get("date") or format_iso_date(today_local()))
            view = container.attendance_ledger.load_for_editing(cohort_id, day)
            return jsonify({
                "date": format_iso_date(day),
                "attendance": {sid: status.value for sid, status in view.items()},
                "summary": container.attendance_ledger.summarize(cohort_id, day, view=view).to_dict(),
            })
        except DomainError as e:
            return _error(e)
        except Exception:
            return _server_error("loading attendance")

    @app.route("/api/education/<cohort_id>/attendance", methods=["PUT", "POST"], endpoint="attendance_put")
    def attendance_put(cohort_id: str):
        try:
            payload = request.get_json(silent=True)
            if not isinstance(payload, dict):
                raise ValidationError("JSON body required")

            day = parse_iso_date(payload.get("date"))
            written = container.attendance_ledger.commit(cohort_id, day, _parse_records(payload))
            return jsonify({
                "success": True,
                "written": written,
                "message": "Attendance recorded successfully",
                "messageAr": "تم تسجيل الحضور بنجاح",
            })
        except DomainError as e:
            return _error(e)
        except Exception:
            return _server_error("committing attendance")

    @app.route("/api/education/<cohort_id>/attendance/report", methods=["GET"], endpoint="attendance_report")
    def attendance_report(cohort_id: str):
        try:
            start, end = _range_args()
            report = container.report_builder.build(cohort_id, start, end)
            return jsonify(report.to_dict())
        except DomainError as e:
            return _error(e)
        except Exception:
            return _server_error("building attendance report")

    @app.route("/api/education/<cohort_id>/attendance/export.csv", methods=["GET"], endpoint="attendance_export_csv")
    def attendance_export_csv(cohort_id: str):
        try:
            start, end = _range_args()
            report = container.report_builder.build(cohort_id, start, end)
            locale = resolve_locale(request.args.get("lang") or app.config.get("DEFAULT_EXPORT_LOCALE"))
            return app.response_class(
                write_report_csv(report, locale=locale),
                mimetype="text/csv",
                headers={"Content-Disposition": f"attachment; filename={report_filename(report)}"},
            )
        except DomainError as e:
            return _error(e)
        except Exception:
            return _server_error("exporting attendance")
