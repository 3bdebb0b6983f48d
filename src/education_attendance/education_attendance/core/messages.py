"""Human-readable messages for error kinds, in the two UI locales."""
from __future__ import annotations

from .enums import ErrorKind

MESSAGES: dict[ErrorKind, dict[str, str]] = {
    ErrorKind.INVALID_REQUEST: {
        "en": "Invalid request",
        "ar": "طلب غير صالح",
    },
    ErrorKind.NOT_FOUND: {
        "en": "Education record not found",
        "ar": "سجل التعليم غير موجود",
    },
    ErrorKind.INVALID_DATE: {
        "en": "Invalid date, expected YYYY-MM-DD",
        "ar": "تاريخ غير صالح، الصيغة المطلوبة YYYY-MM-DD",
    },
    ErrorKind.INVALID_RANGE: {
        "en": "End date must not be before start date",
        "ar": "يجب ألا يكون تاريخ النهاية قبل تاريخ البداية",
    },
    ErrorKind.INVALID_STATUS: {
        "en": "Attendance status must be present or absent",
        "ar": "يجب أن تكون حالة الحضور حاضر أو غائب",
    },
    ErrorKind.UNKNOWN_STUDENT: {
        "en": "One or more students are not enrolled in this education",
        "ar": "طالب واحد أو أكثر غير مسجل في هذا التعليم",
    },
}


def message_for(kind: ErrorKind, locale: str = "en") -> str:
    by_locale = MESSAGES.get(kind) or MESSAGES[ErrorKind.INVALID_REQUEST]
    return by_locale.get(locale, by_locale["en"])
