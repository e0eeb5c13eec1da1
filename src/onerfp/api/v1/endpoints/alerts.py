"""HTTP trigger for the grant alert batch job."""

import logging
import secrets
from typing import Annotated

from fastapi import APIRouter, Header, HTTPException, status

from onerfp.api.v1.dependencies import OptionalUserDep, SessionDep
from onerfp.core.settings import settings
from onerfp.schemas import AlertRunResult
from onerfp.services.alerts import run_grant_alerts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/alerts", tags=["alerts"])


def _authorized(token: str | None, caller_is_omega_admin: bool) -> bool:
    if caller_is_omega_admin:
        return True
    expected = settings.alerts_trigger_token
    return bool(expected and token and secrets.compare_digest(token, expected))


@router.post("/grants/run", response_model=AlertRunResult)
def run_alerts(
    db: SessionDep,
    viewer: OptionalUserDep,
    x_alerts_token: Annotated[str | None, Header()] = None,
) -> AlertRunResult:
    """Run the grant alert job once.

    Callable by a scheduler holding ``ALERTS_TRIGGER_TOKEN`` or by an omega
    admin. Email sends block, so the handler is sync and runs in the
    threadpool.
    """
    if not _authorized(x_alerts_token, bool(viewer and viewer.is_omega_admin)):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to trigger grant alerts",
        )
    result = run_grant_alerts(db)
    logger.info(
        "Grant alert run: %d grants, %d subscribers, %d sent, %d failed",
        result.grants_found, result.subscribers, result.emails_sent, result.failures,
    )
    return AlertRunResult.model_validate(result, from_attributes=True)
