"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STATUS_TABLE = "firedrill_status"
HISTORY_TABLE = "firedrill_history"

STAFF_GROUP_LABEL = "Staff"

# master_attendance.attendance_category value meaning "absent"
ABSENT_CATEGORY = 1

LOAD_ERROR_MESSAGE = "Failed to load data"
DEFAULT_RESET_NOTE = "Manual reset"

DEFAULT_POLL_SECONDS = 3.0
SSE_HEARTBEAT_SECONDS = 15.0
DEFAULT_PORTAL_NAME = "firedrill"

# Tables the board reads or writes; scripts/init_db.py checks them after applying the schema.
REQUIRED_TABLES = (
    "staff",
    "students",
    "master_attendance",
    "firedrill_status",
    "firedrill_history",
    "firedrill_admins",
    "audit_events",
)
