from __future__ import annotations

import logging
from typing import Optional

from ..attendance.aggregator import format_cohort_for_prompt
from ..attendance.service import AttendanceService
from .client import TrendAnalyzer
from .model import TrendAnalysis

logger = logging.getLogger(__name__)


class AnalysisService:
    """Feeds latest-status cohort snapshots to the trend analyzer.

    Only ``id:status`` pairs leave this service; dates and percentages never do.
    """

    def __init__(self, attendance: AttendanceService, analyzer: TrendAnalyzer):
        self._attendance = attendance
        self._analyzer = analyzer

    def _analyze(self, cohort) -> Optional[TrendAnalysis]:
        if not cohort:
            return None
        logger.debug("Requesting trend analysis for %d users", len(cohort))
        return self._analyzer.analyze(format_cohort_for_prompt(cohort))

    def analyze_peer_trends(self, user_id: str) -> Optional[TrendAnalysis]:
        return self._analyze(self._attendance.peer_cohort(user_id))

    def analyze_roster_trends(self, teacher_id: str) -> Optional[TrendAnalysis]:
        return self._analyze(self._attendance.roster_cohort(teacher_id))
