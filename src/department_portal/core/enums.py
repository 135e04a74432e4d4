from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role tag stored on every account, used for access control."""

    ADMIN = "admin"
    FACULTY = "faculty"
    STUDENT = "student"


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"


class EventType(str, Enum):
    LECTURE = "lecture"
    HACKATHON = "hackathon"
    FEST = "fest"
    INTERNSHIP_FAIR = "internship_fair"
    EXAM = "exam"
    NOTICE = "notice"


class Trend(str, Enum):
    """Direction marker attached to a performance flag."""

    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class Community(str, Enum):
    BC_MUSLIM = "BC(MUSLIM)"
    OC = "OC"
    BC = "BC"
    MBC = "MBC"
    SC = "SC"
    SCC = "SCC"
    ST = "ST"


class Quota(str, Enum):
    MANAGEMENT = "management"
    GOVERNMENT = "government"
