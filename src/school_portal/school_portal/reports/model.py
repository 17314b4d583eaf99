from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Summary:
    total: int
    present_count: int
    absent_count: int
    present_percent: int
    absent_percent: int

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "presentCount": self.present_count,
            "absentCount": self.absent_count,
            "presentPercent": self.present_percent,
            "absentPercent": self.absent_percent,
        }


@dataclass(frozen=True)
class ClassSummary:
    """Read-model for one class row of a department summary."""

    class_code: str
    summary: Summary

    def to_dict(self) -> dict:
        return {"classCode": self.class_code, **self.summary.to_dict()}
