# app/core/constants.py

from app.models.enums import ApplicationStatus

# ==========================================================
# APPLICATION STATUS TRANSITIONS
# ==========================================================
# current status -> statuses it may move to.
# Every status may currently move to every other one (Rejected -> Applied
# included). Narrow a row here to forbid a move; the lifecycle service
# answers a disallowed move with InvalidStateError.
ALL_APPLICATION_STATUSES = frozenset(ApplicationStatus)

APPLICATION_TRANSITIONS = {
    ApplicationStatus.Applied: ALL_APPLICATION_STATUSES,
    ApplicationStatus.Shortlisted: ALL_APPLICATION_STATUSES,
    ApplicationStatus.Selected: ALL_APPLICATION_STATUSES,
    ApplicationStatus.Rejected: ALL_APPLICATION_STATUSES,
}

# Only untouched applications can be withdrawn by the student
WITHDRAWABLE_STATUSES = frozenset({ApplicationStatus.Applied})


def is_transition_allowed(current, requested, table=None) -> bool:
    table = APPLICATION_TRANSITIONS if table is None else table
    return ApplicationStatus(requested) in table.get(ApplicationStatus(current), frozenset())


# ==========================================================
# UPLOADS
# ==========================================================
MAX_UPLOAD_SIZE = 5 * 1024 * 1024  # 5MB

RESUME_CONTENT_TYPES = {"application/pdf": "pdf"}
IMAGE_CONTENT_TYPES = {"image/jpeg": "jpg", "image/png": "png"}
ATTACHMENT_CONTENT_TYPES = {
    "application/pdf": "pdf",
    "image/jpeg": "jpg",
    "image/png": "png",
    "application/zip": "zip",
    "text/plain": "txt",
}
