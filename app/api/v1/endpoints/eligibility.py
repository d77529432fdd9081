from fastapi import APIRouter, Depends
import logging
from app.core.security import Principal, get_current_principal
from app.schemas.common import Envelope
from app.schemas.donor import DonorEligibilityResponse
from app.schemas.eligibility import EligibilityCheckRequest, EligibilityView
from app.services.eligibility import check_eligibility, summarize

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/check", response_model=Envelope[DonorEligibilityResponse])
async def check_profile_eligibility(
    request: EligibilityCheckRequest,
    current_user: Principal = Depends(get_current_principal)
):
    """Evaluate an ad-hoc donor profile without touching stored data."""
    result = check_eligibility(request.profile, request.last_donation_date, request.current_date)
    summary = summarize(result)

    logger.info(f"Ad-hoc eligibility check by user {current_user.user_id}: {summary.status.value}")
    return Envelope(data=DonorEligibilityResponse(eligibility=EligibilityView.build(result, summary)))
