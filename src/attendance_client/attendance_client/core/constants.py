"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_REQUEST_TIMEOUT = 10.0

NOT_MARKED_LABEL = "Not Marked"
NO_STUDENTS_PLACEHOLDER = "No students enrolled in this class."
NO_ATTENDANCE_PLACEHOLDER = "No attendance"

# Roles that can have attendance entered against them. Owners and staff are
# listed in the roster but never marked.
MARKABLE_ROLES = frozenset({"student"})
