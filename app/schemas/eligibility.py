"""
Donor profile, medical history and eligibility verdict types.

The evaluator reads DonorProfile/MedicalHistory and returns an
EligibilityCheckResult. All of them are frozen so a verdict can be shared
between callers without copying.
"""
import datetime
import enum
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ChronicCondition(BaseModel):
    model_config = ConfigDict(frozen=True)

    condition: str = Field(..., min_length=1)
    diagnosed: Optional[datetime.date] = None
    medications: Optional[List[str]] = None
    notes: Optional[str] = None


class Surgery(BaseModel):
    model_config = ConfigDict(frozen=True)

    procedure: str = Field(..., min_length=1)
    date: Optional[datetime.date] = None
    notes: Optional[str] = None


class BloodTransfusion(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: Optional[datetime.date] = None
    reason: Optional[str] = None
    location: Optional[str] = None


class PregnancyHistory(BaseModel):
    model_config = ConfigDict(frozen=True)

    has_been_pregnant: bool = False
    number_of_pregnancies: Optional[int] = Field(None, ge=0)
    last_pregnancy_date: Optional[datetime.date] = None


class TravelRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    country: str
    date_from: Optional[datetime.date] = None
    date_to: datetime.date


class Lifestyle(BaseModel):
    model_config = ConfigDict(frozen=True)

    smoker: Optional[bool] = None
    alcohol_consumption: Optional[Literal["none", "occasional", "moderate", "heavy"]] = None
    recent_tattoos: Optional[bool] = None
    recent_piercings: Optional[bool] = None
    recent_travel: Optional[List[TravelRecord]] = None


class MedicalHistory(BaseModel):
    """Structured medical history. A missing section means no data."""
    model_config = ConfigDict(frozen=True)

    has_chronic_conditions: Optional[bool] = None
    chronic_conditions: Optional[List[ChronicCondition]] = None
    current_medications: Optional[List[str]] = None
    allergies: Optional[List[str]] = None
    surgeries: Optional[List[Surgery]] = None
    blood_transfusions: Optional[List[BloodTransfusion]] = None
    pregnancies: Optional[PregnancyHistory] = None
    lifestyle: Optional[Lifestyle] = None


class DonorProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    date_of_birth: datetime.date
    last_donation_date: Optional[datetime.date] = None
    medical_history: Optional[MedicalHistory] = None


class TemporaryDeferral(BaseModel):
    model_config = ConfigDict(frozen=True)

    reason: str
    until: datetime.date
    notes: Optional[str] = None


class PermanentDeferral(BaseModel):
    model_config = ConfigDict(frozen=True)

    reason: str
    notes: Optional[str] = None


class EligibilityCheckResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_eligible: bool
    reasons: Tuple[str, ...] = ()
    next_eligible_date: Optional[datetime.date] = None
    temporary_deferrals: Tuple[TemporaryDeferral, ...] = ()
    permanent_deferrals: Tuple[PermanentDeferral, ...] = ()


class EligibilityStatus(str, enum.Enum):
    ELIGIBLE = "eligible"
    TEMPORARILY_DEFERRED = "temporarily_deferred"
    PERMANENTLY_DEFERRED = "permanently_deferred"


class EligibilitySummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: EligibilityStatus
    message: str
    next_eligible_date: Optional[datetime.date] = None


# Request / response bodies

class EligibilityCheckRequest(BaseModel):
    profile: DonorProfile
    last_donation_date: Optional[datetime.date] = None
    current_date: Optional[datetime.date] = None


class LastDonationOverride(BaseModel):
    last_donation_date: Optional[datetime.date] = None


class EligibilityView(BaseModel):
    """Verdict plus its summary, as returned by the eligibility routes."""
    is_eligible: bool
    status: EligibilityStatus
    message: str
    next_eligible_date: Optional[datetime.date] = None
    reasons: List[str]
    temporary_deferrals: List[TemporaryDeferral]
    permanent_deferrals: List[PermanentDeferral]

    @classmethod
    def build(cls, result: EligibilityCheckResult, summary: EligibilitySummary) -> "EligibilityView":
        return cls(
            is_eligible=result.is_eligible,
            status=summary.status,
            message=summary.message,
            next_eligible_date=summary.next_eligible_date,
            reasons=list(result.reasons),
            temporary_deferrals=list(result.temporary_deferrals),
            permanent_deferrals=list(result.permanent_deferrals),
        )
