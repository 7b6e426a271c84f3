"""
FastAPI dependencies wiring routes to the services.

Tests swap the store through app.dependency_overrides[get_store].
"""

from fastapi import Depends

from nagrik_seva.services.area_overview import AreaOverviewService
from nagrik_seva.services.issue_store import IssueStore, get_issue_store
from nagrik_seva.services.lifecycle import IssueLifecycleEngine


def get_store() -> IssueStore:
    return get_issue_store()


def get_lifecycle_engine(store: IssueStore = Depends(get_store)) -> IssueLifecycleEngine:
    return IssueLifecycleEngine(store)


def get_area_overview_service(store: IssueStore = Depends(get_store)) -> AreaOverviewService:
    return AreaOverviewService(store)
