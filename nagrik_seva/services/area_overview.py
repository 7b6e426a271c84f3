"""
Area Overview Service - civic health dashboard statistics.

Read-only. Derives status totals, category counts and per-location
health from the issues currently in the store.
"""

from collections import defaultdict
from typing import Dict
import logging

from nagrik_seva.models.issue import IssueStatus
from nagrik_seva.models.overview import AreaHealth, AreaOverview
from nagrik_seva.services.issue_store import IssueStore

logger = logging.getLogger(__name__)


class AreaOverviewService:
    """Aggregates issues into dashboard numbers."""

    # Health thresholds on the oldest unresolved issue in an area (days)
    RED_AFTER_DAYS = 5      # strictly more than this is red
    YELLOW_FROM_DAYS = 3    # this many or more is yellow

    def __init__(self, store: IssueStore):
        self.store = store

    @classmethod
    def health_for(cls, max_days_unresolved: int) -> str:
        if max_days_unresolved > cls.RED_AFTER_DAYS:
            return "red"
        if max_days_unresolved >= cls.YELLOW_FROM_DAYS:
            return "yellow"
        return "green"

    def get_overview(self) -> AreaOverview:
        """
        Build the area overview.

        Resolved issues count towards totals and categories but not
        towards an area's unresolved load.
        """
        issues = self.store.list_issues()

        status_counts: Dict[IssueStatus, int] = defaultdict(int)
        categories: Dict[str, int] = defaultdict(int)
        areas: Dict[str, Dict[str, int]] = {}

        for issue in issues:
            status_counts[issue.status] += 1
            categories[issue.category] += 1

            area = areas.setdefault(issue.location, {"unresolved": 0, "max_days": 0})
            if issue.status != IssueStatus.RESOLVED:
                area["unresolved"] += 1
                area["max_days"] = max(area["max_days"], issue.days_unresolved)

        return AreaOverview(
            total=len(issues),
            reported=status_counts[IssueStatus.REPORTED],
            in_progress=status_counts[IssueStatus.FORWARDED] + status_counts[IssueStatus.IN_PROGRESS],
            resolved=status_counts[IssueStatus.RESOLVED],
            categories=dict(categories),
            areas=[
                AreaHealth(
                    location=location,
                    unresolved=stats["unresolved"],
                    max_days_unresolved=stats["max_days"],
                    health=self.health_for(stats["max_days"]),
                )
                for location, stats in sorted(areas.items())
            ],
        )
