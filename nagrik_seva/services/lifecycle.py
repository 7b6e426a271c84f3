"""
Issue Lifecycle Engine - status cycling and time simulation.

DESIGN PRINCIPLES:
- Status moves one step at a time through a fixed cycle
- The cycle wraps from Resolved back to Reported (simulation convenience)
- Every transition is appended to the issue's update history
- Simulated days never touch Resolved issues
- All mutations go through the IssueStore
"""

from typing import Dict, List, Optional
import logging

from nagrik_seva.core.errors import InvalidSimulationError, IssueNotFoundError
from nagrik_seva.models.issue import Issue, IssueStatus, IssueUpdate
from nagrik_seva.services.issue_store import IssueStore

logger = logging.getLogger(__name__)


class IssueLifecycleEngine:
    """
    Policies layered on top of the store.

    Cycle:
    Reported → Forwarded → In Progress → Resolved → Reported
    """

    STATUS_CYCLE: List[IssueStatus] = [
        IssueStatus.REPORTED,
        IssueStatus.FORWARDED,
        IssueStatus.IN_PROGRESS,
        IssueStatus.RESOLVED,
    ]

    # Statuses whose unresolved-day counter keeps running
    OPEN_STATUSES: List[IssueStatus] = [
        status for status in STATUS_CYCLE if status != IssueStatus.RESOLVED
    ]

    def __init__(self, store: IssueStore):
        self.store = store

    @classmethod
    def next_status(cls, current_status: str) -> IssueStatus:
        """
        Get the status following `current_status` in the cycle.

        Args:
            current_status: Current status (enum or its string value)

        Returns:
            Next status; Resolved wraps to Reported
        """
        current = IssueStatus(current_status)
        index = cls.STATUS_CYCLE.index(current)
        return cls.STATUS_CYCLE[(index + 1) % len(cls.STATUS_CYCLE)]

    def advance_status(self, issue_id: int, note: Optional[str] = None) -> Issue:
        """
        Move an issue one step forward in the status cycle.

        Args:
            issue_id: Issue to advance
            note: Optional note stored on the new update entry

        Returns:
            The updated issue

        Raises:
            IssueNotFoundError: If the issue does not exist
        """
        with self.store.locked():
            issue = self.store.get_issue(issue_id)
            if issue is None:
                logger.warning(f"Cannot advance status: issue {issue_id} not found")
                raise IssueNotFoundError(issue_id)

            next_status = self.next_status(issue.status)
            updates = list(issue.updates)
            updates.append(IssueUpdate(status=next_status, date=self.store.now(), note=note))

            return self.store.update_issue_status(issue_id, next_status, updates)

    def simulate_days(self, days: int) -> Dict:
        """
        Let `days` simulated days pass for every open issue.

        Resolved issues keep their counter frozen. Zero days is a no-op.

        Returns:
            Dict with the number of days and issues affected

        Raises:
            InvalidSimulationError: If days is negative
        """
        if days < 0:
            raise InvalidSimulationError(
                "Invalid simulation", [f"days must be non-negative, got {days}"]
            )

        touched = 0
        if days:
            touched = self.store.add_unresolved_days(days, self.OPEN_STATUSES)

        logger.info(f"Simulated {days} day(s) passing for {touched} open issue(s)")
        return {"days": days, "issues_affected": touched}
