"""Example: using the aggregation functions directly (no Flask, no database)."""

from datetime import date

from attendance_tracker.attendance import aggregator
from attendance_tracker.attendance.model import AttendanceRecord
from attendance_tracker.attendance.policy import STUDENT_POLICY
from attendance_tracker.core.enums import AttendanceStatus


def main():
    raw = [
        {"date": "2024-05-23", "status": "Present"},
        {"date": "2024-05-20", "status": "Present"},
        {"date": "2024-05-22", "status": "Absent"},
        {"date": "2024-05-21", "status": "Tardy"},
    ]
    history = [AttendanceRecord.from_dict(item, user_id="S01") for item in raw]
    # Re-marking 2024-05-22 replaces the Absent entry.
    history = aggregator.upsert_record(history, AttendanceRecord("S01", date(2024, 5, 22), AttendanceStatus.PRESENT))

    snapshot = aggregator.summarize(history, STUDENT_POLICY)
    print(snapshot.to_display(), aggregator.format_percentage(snapshot.percentage))


if __name__ == "__main__":
    main()
