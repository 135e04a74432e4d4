"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import Weekday

TEACHING_PERIODS_PER_DAY = 8

# Ten-slot daily template: 8 teaching periods and 2 breaks.
PERIODS_CONFIG = (
    {"name": "Period 1", "time": "09:00 - 09:50", "is_break": False},
    {"name": "Period 2", "time": "09:50 - 10:40", "is_break": False},
    {"name": "Break", "time": "10:40 - 11:00", "is_break": True},
    {"name": "Period 3", "time": "11:00 - 11:50", "is_break": False},
    {"name": "Period 4", "time": "11:50 - 12:40", "is_break": False},
    {"name": "Lunch", "time": "12:40 - 01:30", "is_break": True},
    {"name": "Period 5", "time": "01:30 - 02:15", "is_break": False},
    {"name": "Period 6", "time": "02:15 - 03:00", "is_break": False},
    {"name": "Period 7", "time": "03:00 - 03:45", "is_break": False},
    {"name": "Period 8", "time": "03:45 - 04:30", "is_break": False},
)

SCHOOL_DAYS = tuple(Weekday)

FREE_PERIOD = "Free Period"
NOT_AVAILABLE = "N/A"

# (label, upper bound exclusive); the last band is open-ended.
DISTRIBUTION_BANDS = (
    ("0-39 (Fail)", 40),
    ("40-49", 50),
    ("50-59", 60),
    ("60-69", 70),
    ("70-79", 80),
    ("80-89", 90),
    ("90-100", None),
)

WATCH_THRESHOLD = 50
TOP_THRESHOLD = 90
PERFORMANCE_LIST_LIMIT = 10

RECENT_FEEDBACK_LIMIT = 20
MIN_PASSWORD_LENGTH = 6
