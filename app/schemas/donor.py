from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Literal
from datetime import date, datetime
from app.schemas.eligibility import MedicalHistory, EligibilityView

BloodType = Literal["A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-"]

class DonorBase(BaseModel):
    user_id: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    date_of_birth: date
    blood_type: Optional[BloodType] = None
    last_donation_date: Optional[date] = None
    total_donations: int = Field(0, ge=0)

class DonorCreate(DonorBase):
    medical_history: Optional[MedicalHistory] = None

class DonorResponse(DonorBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    medical_history: Optional[dict] = None
    is_deferred_temporary: bool
    is_deferred_permanent: bool
    deferral_reason: Optional[str] = None
    deferral_end_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class DeferralCache(BaseModel):
    """Stored deferral state returned next to a fresh verdict."""
    model_config = ConfigDict(from_attributes=True)

    total_donations: int
    last_donation_date: Optional[date] = None
    is_deferred_temporary: bool
    is_deferred_permanent: bool
    deferral_reason: Optional[str] = None
    deferral_end_date: Optional[date] = None

class DonorEligibilityResponse(BaseModel):
    eligibility: EligibilityView
    profile: Optional[DeferralCache] = None
