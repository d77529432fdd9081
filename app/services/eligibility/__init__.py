# Donor eligibility engine
from app.services.eligibility.evaluator import (
    EligibilityInputError,
    check_eligibility,
    get_eligibility_summary,
    get_next_eligible_date,
    is_eligible_today,
    summarize,
)

__all__ = [
    'EligibilityInputError',
    'check_eligibility',
    'get_eligibility_summary',
    'get_next_eligible_date',
    'is_eligible_today',
    'summarize',
]
