"""
Bridge between stored donor profiles and the eligibility engine.

Stored deferral flags are only a cache of the last verdict: they are
rewritten from a fresh evaluation and never fed back into one.
"""
import logging

from pydantic import ValidationError

from app.models.donor import DonorProfileRecord
from app.schemas.eligibility import DonorProfile, EligibilityCheckResult, MedicalHistory
from app.services.eligibility import EligibilityInputError

logger = logging.getLogger(__name__)


def profile_from_record(record: DonorProfileRecord) -> DonorProfile:
    """Build the evaluator input from a stored donor profile."""
    if record.date_of_birth is None:
        raise EligibilityInputError(f"Donor profile {record.id} has no date of birth")

    medical_history = None
    if record.medical_history:
        try:
            medical_history = MedicalHistory.model_validate(record.medical_history)
        except ValidationError as e:
            logger.error(f"Stored medical history for donor profile {record.id} is invalid: {e}")
            raise EligibilityInputError(f"Donor profile {record.id} has an invalid medical history") from e

    return DonorProfile(
        date_of_birth=record.date_of_birth,
        last_donation_date=record.last_donation_date,
        medical_history=medical_history,
    )


def apply_verdict(record: DonorProfileRecord, result: EligibilityCheckResult) -> DonorProfileRecord:
    """
    Refresh the cached deferral columns of a donor profile from a verdict.

    The caller owns the session and commits.
    """
    is_permanent = bool(result.permanent_deferrals)
    is_temporary = bool(result.temporary_deferrals) and not is_permanent

    record.is_deferred_permanent = is_permanent
    record.is_deferred_temporary = is_temporary

    if is_permanent:
        record.deferral_reason = result.permanent_deferrals[0].reason
    elif result.reasons:
        record.deferral_reason = result.reasons[0]
    else:
        record.deferral_reason = None

    # The donor is clear only once every temporary deferral has lapsed
    if is_temporary:
        record.deferral_end_date = max(deferral.until for deferral in result.temporary_deferrals)
    else:
        record.deferral_end_date = None

    logger.info(
        f"Deferral status refreshed for donor profile {record.id}: "
        f"permanent={is_permanent}, temporary={is_temporary}, until={record.deferral_end_date}"
    )
    return record
