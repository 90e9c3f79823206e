"""
Routine Dashboard - 데이터 모델
"""
from dataclasses import dataclass, fields
from typing import Optional


@dataclass
class ScheduleEntry:
    """주간 시간표의 단일 수업 배치"""
    course_code: str           # "CSE201"
    section: str               # "A"
    teacher: str               # "Dr. Ahmed Khan"
    day: str                   # "Monday" ~ "Friday"
    start_time: str            # "09:00"
    end_time: str              # "10:30"
    room: str = "201"
    building: str = "Building A"
    color: str = ""
    id: str = ""               # 저장소에서 할당

    @classmethod
    def from_dict(cls, data):
        """저장소 문서(dict) → ScheduleEntry (모르는 키는 무시)"""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self):
        d = {
            "course_code": self.course_code,
            "section": self.section,
            "teacher": self.teacher,
            "day": self.day,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "room": self.room,
            "building": self.building,
            "color": self.color,
        }
        if self.id:
            d["id"] = self.id
        return d

    @property
    def label(self):
        return f"{self.course_code}-{self.section}"


@dataclass
class ConflictIssue:
    """후보 배치와 기존 배치 사이의 규칙 위반"""
    kind: str                  # "duration" | "room" | "teacher" | "gap"
    message: str
    entry_id: Optional[str] = None

    def to_dict(self):
        return {
            "kind": self.kind,
            "message": self.message,
            "entry_id": self.entry_id,
        }
