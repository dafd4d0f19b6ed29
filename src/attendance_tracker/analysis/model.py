from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TrendAnalysis:
    analysis_result: str
    flagged_absences: Optional[str] = None

    def to_dict(self) -> dict:
        return {"analysisResult": self.analysis_result, "flaggedAbsences": self.flagged_absences}
