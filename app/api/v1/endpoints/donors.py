from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from pydantic import ValidationError
from datetime import date
from typing import Optional
import logging
from app.database.database import get_db
from app.models.donor import DonorProfileRecord
from app.core.security import Principal, get_current_principal, ensure_donor_access
from app.schemas.common import Envelope
from app.schemas.donor import DonorCreate, DonorResponse, DeferralCache, DonorEligibilityResponse
from app.schemas.eligibility import EligibilityView, LastDonationOverride, MedicalHistory
from app.services.deferral_status import apply_verdict, profile_from_record
from app.services.eligibility import check_eligibility, summarize

logger = logging.getLogger(__name__)
router = APIRouter()

def get_donor_or_404(db: Session, donor_id: int) -> DonorProfileRecord:
    donor = db.query(DonorProfileRecord).filter(DonorProfileRecord.id == donor_id).first()
    if not donor:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Donor profile not found"
        )
    return donor

@router.post("/", response_model=Envelope[DonorResponse], status_code=status.HTTP_201_CREATED)
async def create_donor(
    donor: DonorCreate,
    db: Session = Depends(get_db),
    current_user: Principal = Depends(get_current_principal)
):
    """Create a donor profile for the caller (or for anyone, as an administrator)."""
    ensure_donor_access(current_user, donor.user_id)

    existing_donor = db.query(DonorProfileRecord).filter(DonorProfileRecord.user_id == donor.user_id).first()
    if existing_donor:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Donor profile already exists for this user"
        )

    data = donor.model_dump(exclude={"medical_history"})
    if donor.medical_history is not None:
        data["medical_history"] = donor.medical_history.model_dump(mode="json", exclude_none=True)

    db_donor = DonorProfileRecord(**data)
    db.add(db_donor)
    db.commit()
    db.refresh(db_donor)

    logger.info(f"Donor profile created: {db_donor.id} by user: {current_user.user_id}")
    return Envelope(data=DonorResponse.model_validate(db_donor))

@router.get("/{donor_id}", response_model=Envelope[DonorResponse])
async def get_donor(
    donor_id: int,
    db: Session = Depends(get_db),
    current_user: Principal = Depends(get_current_principal)
):
    """Get a specific donor profile by ID."""
    donor = get_donor_or_404(db, donor_id)
    ensure_donor_access(current_user, donor.user_id)
    return Envelope(data=DonorResponse.model_validate(donor))

@router.get("/{donor_id}/eligibility", response_model=Envelope[DonorEligibilityResponse])
async def get_donor_eligibility(
    donor_id: int,
    db: Session = Depends(get_db),
    current_user: Principal = Depends(get_current_principal)
):
    """Evaluate a stored donor as of today and refresh their cached deferral status."""
    donor = get_donor_or_404(db, donor_id)
    ensure_donor_access(current_user, donor.user_id)

    result = check_eligibility(profile_from_record(donor), current_date=date.today())
    summary = summarize(result)

    apply_verdict(donor, result)
    db.commit()
    db.refresh(donor)

    return Envelope(data=DonorEligibilityResponse(
        eligibility=EligibilityView.build(result, summary),
        profile=DeferralCache.model_validate(donor),
    ))

@router.post("/{donor_id}/eligibility", response_model=Envelope[DonorEligibilityResponse])
async def check_donor_eligibility(
    donor_id: int,
    override: Optional[LastDonationOverride] = None,
    db: Session = Depends(get_db),
    current_user: Principal = Depends(get_current_principal)
):
    """What-if check with an optional last donation date; stored status is left untouched."""
    donor = get_donor_or_404(db, donor_id)
    ensure_donor_access(current_user, donor.user_id)

    result = check_eligibility(
        profile_from_record(donor),
        override.last_donation_date if override else None,
        current_date=date.today(),
    )
    summary = summarize(result)

    return Envelope(data=DonorEligibilityResponse(eligibility=EligibilityView.build(result, summary)))

@router.put("/{donor_id}/medical-history", response_model=Envelope[dict])
async def update_medical_history(
    donor_id: int,
    medical_history: MedicalHistory,
    db: Session = Depends(get_db),
    current_user: Principal = Depends(get_current_principal)
):
    """Merge the posted sections into the donor's stored medical history."""
    donor = get_donor_or_404(db, donor_id)
    ensure_donor_access(current_user, donor.user_id)

    updated = dict(donor.medical_history or {})
    updated.update(medical_history.model_dump(mode="json", exclude_unset=True))

    try:
        merged = MedicalHistory.model_validate(updated)
    except ValidationError as e:
        logger.error(f"Merged medical history for donor profile {donor.id} is invalid: {e}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Stored medical history is invalid and could not be merged"
        )
    donor.medical_history = merged.model_dump(mode="json", exclude_none=True)
    db.commit()
    db.refresh(donor)

    logger.info(f"Medical history updated for donor profile {donor.id} by user: {current_user.user_id}")
    return Envelope(data={"medical_history": donor.medical_history})
