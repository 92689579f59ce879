"""
Route du reflet quotidien.

Expose `POST /v1/insights/daily`: appel authentifié (Bearer) avec `{timeZoneId, localDate}`.
Les erreurs du domaine sont converties en enveloppes par `inyon.apigw.errors`.
"""

from fastapi import APIRouter, Depends

from inyon.api.deps import get_caller, get_orchestrator
from inyon.api.schemas import DailyInsightRequest, DailyInsightResponse
from inyon.domain.daily_insight import DailyInsightOrchestrator
from inyon.domain.entities import CallerIdentity

router = APIRouter(prefix="/v1/insights", tags=["insights"])
caller_dep = Depends(get_caller)
orchestrator_dep = Depends(get_orchestrator)


@router.post("/daily", response_model=DailyInsightResponse)
async def get_daily_insight(
    payload: DailyInsightRequest,
    caller: CallerIdentity | None = caller_dep,
    orchestrator: DailyInsightOrchestrator = orchestrator_dep,
):
    """
    Retourne le reflet du jour de l'appelant, depuis le cache ou fraîchement généré.

    Retour: `DailyInsightResponse` (`generatedAt` en millisecondes Unix).
    """
    insight = await orchestrator.get_daily_insight(
        caller, payload.timeZoneId, payload.localDate
    )
    return insight.to_response()
