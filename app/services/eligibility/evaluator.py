"""
Donor eligibility evaluation.

check_eligibility runs every rule in a single pass (age, donation interval,
then the medical history rules) and never stops at the first failure, so a
donor sees every reason they are deferred. The reference date is always
passed in explicitly; nothing here reads the clock except the *_today
helpers and the current_date default.
"""
import logging
from datetime import date
from typing import List, Optional

from app.schemas.eligibility import (
    DonorProfile,
    EligibilityCheckResult,
    EligibilityStatus,
    EligibilitySummary,
    PermanentDeferral,
    TemporaryDeferral,
)
from app.services.eligibility.constants import DONATION_INTERVAL_DAYS, MAXIMUM_AGE, MINIMUM_AGE
from app.services.eligibility.dates import add_days, add_years, as_date, calculate_age, days_between
from app.services.eligibility.rules import evaluate_medical_history

logger = logging.getLogger(__name__)


class EligibilityInputError(ValueError):
    """Raised when a donor profile cannot be evaluated (e.g. no date of birth)."""


def _validate_date(value, field_name: str) -> date:
    if not isinstance(value, date):
        raise EligibilityInputError(f"{field_name} must be a calendar date, got {value!r}")
    return as_date(value)


def check_eligibility(
    profile: DonorProfile,
    last_donation_date: Optional[date] = None,
    current_date: Optional[date] = None,
) -> EligibilityCheckResult:
    """
    Evaluate whether a donor may give whole blood on current_date.

    Args:
        profile: Donor profile with date of birth and optional medical history
        last_donation_date: Overrides the profile's last donation date when given
        current_date: Reference date for every relative computation (defaults to today)

    Returns:
        EligibilityCheckResult; an ineligible donor is a normal result, not an error

    Raises:
        EligibilityInputError: the profile has no valid date of birth
    """
    date_of_birth = _validate_date(getattr(profile, 'date_of_birth', None), 'date_of_birth')
    current_date = date.today() if current_date is None else _validate_date(current_date, 'current_date')

    is_eligible = True
    reasons: List[str] = []
    next_eligible_date: Optional[date] = None
    temporary_deferrals: List[TemporaryDeferral] = []
    permanent_deferrals: List[PermanentDeferral] = []

    # Age
    age = calculate_age(date_of_birth, current_date)
    if age < MINIMUM_AGE:
        is_eligible = False
        reasons.append(f"Must be at least {MINIMUM_AGE} years old")
        next_eligible_date = add_years(date_of_birth, MINIMUM_AGE)
    elif age > MAXIMUM_AGE:
        is_eligible = False
        permanent_deferrals.append(PermanentDeferral(
            reason=f"Age limit exceeded (maximum {MAXIMUM_AGE} years)",
            notes="Permanent deferral due to age restrictions",
        ))
        reasons.append("Age limit exceeded")

    # Donation interval
    effective_last_donation = last_donation_date or getattr(profile, 'last_donation_date', None)
    if effective_last_donation:
        effective_last_donation = _validate_date(effective_last_donation, 'last_donation_date')
        days_since = days_between(effective_last_donation, current_date)
        if days_since < DONATION_INTERVAL_DAYS:
            is_eligible = False
            next_eligible_date = get_next_eligible_date(effective_last_donation)
            temporary_deferrals.append(TemporaryDeferral(
                reason="Minimum interval between donations not met",
                until=next_eligible_date,
                notes=f"Must wait {DONATION_INTERVAL_DAYS} days between whole blood donations",
            ))
            reasons.append(f"Must wait {DONATION_INTERVAL_DAYS - days_since} more days since last donation")

    # Medical history
    medical_history = getattr(profile, 'medical_history', None)
    if medical_history:
        for finding in evaluate_medical_history(medical_history, current_date):
            is_eligible = False
            deferral = finding['deferral']
            if isinstance(deferral, PermanentDeferral):
                permanent_deferrals.append(deferral)
            else:
                temporary_deferrals.append(deferral)
            reasons.append(finding['reason'])

    if not is_eligible:
        logger.debug(f"Donor ineligible on {current_date.isoformat()}: {reasons}")

    return EligibilityCheckResult(
        is_eligible=is_eligible,
        reasons=tuple(reasons),
        next_eligible_date=next_eligible_date,
        temporary_deferrals=tuple(temporary_deferrals),
        permanent_deferrals=tuple(permanent_deferrals),
    )


def summarize(result: EligibilityCheckResult) -> EligibilitySummary:
    """Classify a verdict into exactly one display status."""
    if result.is_eligible:
        return EligibilitySummary(
            status=EligibilityStatus.ELIGIBLE,
            message="You are eligible to donate blood!",
        )

    if result.permanent_deferrals:
        return EligibilitySummary(
            status=EligibilityStatus.PERMANENTLY_DEFERRED,
            message=f"You are permanently deferred from donating: {result.permanent_deferrals[0].reason}",
        )

    if result.temporary_deferrals:
        return EligibilitySummary(
            status=EligibilityStatus.TEMPORARILY_DEFERRED,
            message=f"You are temporarily deferred: {result.reasons[0]}",
            next_eligible_date=min(deferral.until for deferral in result.temporary_deferrals),
        )

    return EligibilitySummary(
        status=EligibilityStatus.TEMPORARILY_DEFERRED,
        message="Please consult with medical staff about your eligibility",
    )


def get_eligibility_summary(
    profile: DonorProfile,
    last_donation_date: Optional[date] = None,
    current_date: Optional[date] = None,
) -> EligibilitySummary:
    """Evaluate a donor and return the status/message shown to them."""
    return summarize(check_eligibility(profile, last_donation_date, current_date))


def get_next_eligible_date(last_donation_date: date) -> date:
    """Earliest date another whole blood donation is allowed."""
    return add_days(as_date(last_donation_date), DONATION_INTERVAL_DAYS)


def is_eligible_today(profile: DonorProfile, last_donation_date: Optional[date] = None) -> bool:
    return check_eligibility(profile, last_donation_date, date.today()).is_eligible
