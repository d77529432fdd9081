"""Unit tests for refreshing a stored donor's cached deferral status."""
from datetime import date

import pytest

from app.models.donor import DonorProfileRecord
from app.services.deferral_status import apply_verdict, profile_from_record
from app.services.eligibility import EligibilityInputError, check_eligibility

REFERENCE = date(2024, 1, 15)


def make_record(**overrides):
    data = {
        "id": 1,
        "user_id": "donor-1",
        "first_name": "John",
        "last_name": "Doe",
        "date_of_birth": date(1990, 1, 1),
        "is_deferred_temporary": True,
        "is_deferred_permanent": True,
        "deferral_reason": "stale",
        "deferral_end_date": date(2000, 1, 1),
    }
    data.update(overrides)
    return DonorProfileRecord(**data)


def test_profile_from_record_parses_stored_history():
    record = make_record(
        last_donation_date=date(2023, 12, 1),
        medical_history={
            "current_medications": ["Warfarin"],
            "lifestyle": {"recent_travel": [{"country": "Kenya", "date_to": "2023-10-01"}]},
        },
    )
    profile = profile_from_record(record)
    assert profile.date_of_birth == date(1990, 1, 1)
    assert profile.last_donation_date == date(2023, 12, 1)
    assert profile.medical_history.current_medications == ["Warfarin"]
    assert profile.medical_history.lifestyle.recent_travel[0].date_to == date(2023, 10, 1)


def test_profile_from_record_rejects_bad_input():
    with pytest.raises(EligibilityInputError):
        profile_from_record(make_record(date_of_birth=None))
    with pytest.raises(EligibilityInputError):
        profile_from_record(make_record(medical_history={"blood_transfusions": [{"date": "not-a-date"}]}))


def test_stored_flags_do_not_affect_the_verdict():
    record = make_record()
    assert check_eligibility(profile_from_record(record), current_date=REFERENCE).is_eligible is True


def test_eligible_verdict_clears_cache():
    record = make_record()
    apply_verdict(record, check_eligibility(profile_from_record(record), current_date=REFERENCE))
    assert record.is_deferred_permanent is False
    assert record.is_deferred_temporary is False
    assert record.deferral_reason is None
    assert record.deferral_end_date is None


def test_temporary_verdict_keeps_latest_end_date():
    record = make_record(medical_history={
        "current_medications": ["Aspirin"],
        "lifestyle": {"recent_piercings": True},
    })
    apply_verdict(record, check_eligibility(profile_from_record(record), current_date=REFERENCE))
    assert record.is_deferred_permanent is False
    assert record.is_deferred_temporary is True
    assert record.deferral_reason == "Current medication may affect eligibility: Aspirin"
    assert record.deferral_end_date == date(2024, 4, 15)


def test_permanent_verdict_wins_over_temporary():
    record = make_record(medical_history={
        "chronic_conditions": [{"condition": "Hepatitis B"}],
        "lifestyle": {"recent_tattoos": True},
    })
    apply_verdict(record, check_eligibility(profile_from_record(record), current_date=REFERENCE))
    assert record.is_deferred_permanent is True
    assert record.is_deferred_temporary is False
    assert record.deferral_reason == "Medical condition: Hepatitis B"
    assert record.deferral_end_date is None


def test_underage_verdict_records_reason_without_deferral():
    record = make_record(date_of_birth=date(2010, 3, 1))
    apply_verdict(record, check_eligibility(profile_from_record(record), current_date=REFERENCE))
    assert record.is_deferred_permanent is False
    assert record.is_deferred_temporary is False
    assert record.deferral_reason == "Must be at least 16 years old"
