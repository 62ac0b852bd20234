from enum import Enum


class ApplicationStatus(str, Enum):
    Applied = "Applied"
    Shortlisted = "Shortlisted"
    Selected = "Selected"
    Rejected = "Rejected"


class ProjectStatus(str, Enum):
    Planning = "Planning"
    InProgress = "In Progress"
    Completed = "Completed"


def enum_values(enum_cls):
    """Persist enum values (not member names) so 'In Progress' round-trips."""
    return [member.value for member in enum_cls]
