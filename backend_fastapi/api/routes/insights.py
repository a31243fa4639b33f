from fastapi import APIRouter, Depends

from backend_fastapi.api.deps import insights_use_case
from backend_fastapi.api.errors import http_error
from backend_fastapi.api.schemas import InsightsOut
from core.application.get_insights import GetInsightsUseCase
from core.domain.errors import TaskError
from core.domain.insights import Insights

router = APIRouter(prefix="/insights", tags=["insights"])


@router.get(
    "",
    response_model=InsightsOut,
    summary="Resumen de insights",
)
def get_insights(
    use_case: GetInsightsUseCase = Depends(insights_use_case),
) -> Insights:
    """
    Conteos por prioridad y estado, más un resumen legible.
    """
    try:
        return use_case.execute()
    except TaskError as e:
        raise http_error(e) from e
