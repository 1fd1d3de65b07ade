"""
Proposal Analytics Routes

Win-probability report for a proposal and company profile completeness.
All endpoints require an authenticated user associated with a company.
"""
import logging
from fastapi import APIRouter, HTTPException, Depends
from fastapi.concurrency import run_in_threadpool

from app.domain.exceptions import ProposalNotFoundError
from app.middleware.auth import verify_company_user
from app.models.analytics_schema import (
    AnalyticsReportResponse,
    CompletenessResponse,
    ErrorResponse,
)
from app.services.analytics_service import get_analytics_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/analytics", tags=["analytics"])

PROPOSAL_NOT_FOUND = "Proposal not found or access denied"


# ===================== ENDPOINTS =====================

@router.get(
    "/company/completeness",
    response_model=CompletenessResponse,
    responses={403: {"model": ErrorResponse}}
)
async def get_company_completeness(user: dict = Depends(verify_company_user)):
    """
    Get the caller's company profile completeness.

    Four equally-weighted categories: basic info, team, projects, awards.
    """
    try:
        service = get_analytics_service()
        report = await run_in_threadpool(service.get_completeness_report, user["company_id"])
        return CompletenessResponse(success=True, **report)
    except Exception as e:
        logger.error(f"Error getting completeness for company {user['company_id']}: {e}")
        raise HTTPException(500, "Failed to compute profile completeness")


@router.get(
    "/{proposal_id}",
    response_model=AnalyticsReportResponse,
    response_model_exclude_none=True,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)
async def get_proposal_analytics(
    proposal_id: str,
    user: dict = Depends(verify_company_user)
):
    """
    Get the win-probability report for a proposal.

    Returns success rate, confidence, factor breakdown, data points
    and best-practice suggestions. A proposal owned by another company
    is reported exactly like a missing one.
    """
    try:
        service = get_analytics_service()
        report = await run_in_threadpool(
            service.get_proposal_report, proposal_id, user["company_id"]
        )
        return AnalyticsReportResponse(**report.to_dict())
    except ProposalNotFoundError:
        logger.warning(f"Analytics requested for unknown proposal {proposal_id}")
        raise HTTPException(404, PROPOSAL_NOT_FOUND)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error generating analytics for proposal {proposal_id}: {e}")
        raise HTTPException(500, "Failed to generate analytics report")
