"""
Analysis endpoints - complaint classification and area dashboard.
"""

from fastapi import APIRouter, Depends

from nagrik_seva.models.analysis import AnalyzeRequest, ClassificationResult
from nagrik_seva.models.overview import AreaOverview
from nagrik_seva.routes.deps import get_area_overview_service
from nagrik_seva.services.area_overview import AreaOverviewService
from nagrik_seva.services.classifier import classify_text

router = APIRouter(tags=["Analysis"])


@router.post("/analyze", response_model=ClassificationResult)
async def analyze_text(request: AnalyzeRequest):
    """
    Route a free-text complaint to a department.

    Keyword rules only; never fails for any text.
    """
    return classify_text(request.text)


@router.get("/area-overview", response_model=AreaOverview)
async def area_overview(service: AreaOverviewService = Depends(get_area_overview_service)):
    """
    Civic health dashboard: status totals, category counts and
    unresolved load per location.
    """
    return service.get_overview()
