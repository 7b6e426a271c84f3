"""
Issue endpoints - reporting, retrieval and lifecycle simulation.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
import logging

from nagrik_seva.core.errors import IssueNotFoundError
from nagrik_seva.models.issue import (
    Issue, IssueCreate, IssueStatus, SimulateDaysRequest, SimulateDaysResponse
)
from nagrik_seva.routes.deps import get_lifecycle_engine, get_store
from nagrik_seva.services.issue_store import IssueStore
from nagrik_seva.services.lifecycle import IssueLifecycleEngine

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Issues"])


@router.get("/issues", response_model=List[Issue])
async def list_issues(
    status_filter: Optional[IssueStatus] = Query(None, alias="status", description="Filter by status"),
    category: Optional[str] = Query(None, description="Filter by category"),
    user_id: Optional[str] = Query(None, alias="userId", description="Filter by reporter"),
    store: IssueStore = Depends(get_store)
):
    """
    Get all issues, newest first.
    """
    return store.list_issues(status=status_filter, category=category, user_id=user_id)


@router.post("/issues", response_model=Issue, status_code=status.HTTP_201_CREATED)
async def create_issue(issue: IssueCreate, store: IssueStore = Depends(get_store)):
    """
    Report a new civic issue.

    Starts in Reported unless another status is given, with
    daysUnresolved 0 and a single history entry.
    """
    logger.info(f"POST /issues - category={issue.category}, location={issue.location}")
    return store.create_issue(issue)


def parse_issue_id(raw_id: str) -> int:
    """Path ids that are not integers can never match an issue."""
    try:
        return int(raw_id)
    except ValueError:
        raise IssueNotFoundError(raw_id)


@router.get("/issues/{issue_id}", response_model=Issue)
async def get_issue(issue_id: str, store: IssueStore = Depends(get_store)):
    issue = store.get_issue(parse_issue_id(issue_id))
    if issue is None:
        raise IssueNotFoundError(issue_id)
    return issue


@router.post("/issues/{issue_id}/simulate", response_model=Issue)
async def simulate_status_update(
    issue_id: str,
    lifecycle: IssueLifecycleEngine = Depends(get_lifecycle_engine)
):
    """
    Advance an issue one step through the status cycle.

    Reported → Forwarded → In Progress → Resolved → Reported
    """
    return lifecycle.advance_status(parse_issue_id(issue_id))


@router.post("/simulate-days", response_model=SimulateDaysResponse)
async def simulate_days(
    request: SimulateDaysRequest,
    lifecycle: IssueLifecycleEngine = Depends(get_lifecycle_engine)
):
    """
    Let simulated days pass for every issue that is not Resolved.
    """
    lifecycle.simulate_days(request.days)
    return SimulateDaysResponse(message=f"Simulated {request.days} days passing.")
