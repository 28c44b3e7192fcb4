"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ON_TIME_TOLERANCE_MINUTES = 15
LATE_WINDOW_MINUTES = 30

EARTH_RADIUS_METERS = 6_371_000
DEFAULT_GEOFENCE_RADIUS_METERS = 200

PERCENT_MIN = 0
PERCENT_MAX = 100

MANUAL_ENTRY_MARKERS = ("Điểm danh thủ công", "manual")
AUTO_APPROVAL_MARKER = "Tự động duyệt"
MANUAL_ENTRY_NOTE = "Điểm danh thủ công bởi officer"
AUTO_APPROVAL_NOTE = "Tự động duyệt: Đúng vị trí, đúng thời gian, có ảnh"
SYSTEM_VERIFIER_NAME = "Hệ thống tự động"
DEFAULT_PARTICIPANT_ROLE = "Người Tham Gia"

CHECK_IN_TYPE_LABELS = {
    "start": "Đầu buổi",
    "end": "Cuối buổi",
}

# Used when a multi-day activity has no active slot templates.
DEFAULT_MULTI_DAY_SLOTS = (
    ("morning", "Buổi Sáng", "08:00", "11:30"),
    ("afternoon", "Buổi Chiều", "13:00", "17:00"),
    ("evening", "Buổi Tối", "18:00", "21:00"),
)
