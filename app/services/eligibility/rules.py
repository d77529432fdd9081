"""
Medical history rule functions.

Each rule inspects one section of a donor's medical history and returns the
findings it triggers as a list of dicts:

    {'reason': <text for the reasons list>, 'deferral': <TemporaryDeferral | PermanentDeferral>}

An empty list means the rule did not fire. Rules never raise for a donor who
is not eligible.
"""
import logging
from datetime import date
from typing import Any, Dict, Iterable, List

from app.schemas.eligibility import MedicalHistory, PermanentDeferral, TemporaryDeferral
from app.services.eligibility.constants import (
    DEFERRAL_MEDICATIONS,
    MEDICATION_DEFERRAL_DAYS,
    PERMANENT_DEFERRAL_CONDITIONS,
    PREGNANCY_DEFERRAL_WEEKS,
    TATTOO_PIERCING_DEFERRAL_MONTHS,
    TRANSFUSION_DEFERRAL_MONTHS,
    TRAVEL_DEFERRAL_COUNTRIES,
    TRAVEL_DEFERRAL_MONTHS,
)
from app.services.eligibility.dates import add_days, add_months, add_years, months_between, weeks_between

logger = logging.getLogger(__name__)

Finding = Dict[str, Any]


def matches_keyword(text: str, keywords: Iterable[str]) -> bool:
    """Case-insensitive substring match of any keyword inside text."""
    text_lower = text.lower()
    return any(keyword in text_lower for keyword in keywords)


def check_chronic_conditions(medical_history: MedicalHistory, current_date: date) -> List[Finding]:
    """Permanent deferral for every condition naming a disqualifying disease."""
    findings = []
    for condition in medical_history.chronic_conditions or []:
        if matches_keyword(condition.condition, PERMANENT_DEFERRAL_CONDITIONS):
            reason = f"Medical condition: {condition.condition}"
            findings.append({
                'reason': reason,
                'deferral': PermanentDeferral(reason=reason, notes=condition.notes),
            })
    return findings


def check_current_medications(medical_history: MedicalHistory, current_date: date) -> List[Finding]:
    """Temporary deferral for every medication on the deferral list."""
    findings = []
    for medication in medical_history.current_medications or []:
        if matches_keyword(medication, DEFERRAL_MEDICATIONS):
            findings.append({
                'reason': f"Current medication may affect eligibility: {medication}",
                'deferral': TemporaryDeferral(
                    reason=f"Current medication: {medication}",
                    until=add_days(current_date, MEDICATION_DEFERRAL_DAYS),
                    notes="Consult with medical staff about medication deferral period",
                ),
            })
    return findings


def check_blood_transfusions(medical_history: MedicalHistory, current_date: date) -> List[Finding]:
    """Deferral for the first transfusion received within the last 12 months."""
    recent = next(
        (
            transfusion for transfusion in medical_history.blood_transfusions or []
            if transfusion.date is not None
            and months_between(transfusion.date, current_date) < TRANSFUSION_DEFERRAL_MONTHS
        ),
        None,
    )
    if recent is None:
        return []

    return [{
        'reason': "Recent blood transfusion - must wait 12 months",
        'deferral': TemporaryDeferral(
            reason="Recent blood transfusion",
            until=add_years(recent.date, 1),
            notes="Must wait 12 months after blood transfusion",
        ),
    }]


def check_pregnancy(medical_history: MedicalHistory, current_date: date) -> List[Finding]:
    pregnancies = medical_history.pregnancies
    if not pregnancies or not pregnancies.has_been_pregnant or not pregnancies.last_pregnancy_date:
        return []

    last_pregnancy_date = pregnancies.last_pregnancy_date
    weeks_since = weeks_between(last_pregnancy_date, current_date)
    if weeks_since >= PREGNANCY_DEFERRAL_WEEKS:
        return []

    return [{
        'reason': f"Recent pregnancy - must wait {PREGNANCY_DEFERRAL_WEEKS - weeks_since} more weeks",
        'deferral': TemporaryDeferral(
            reason="Recent pregnancy",
            until=add_days(last_pregnancy_date, PREGNANCY_DEFERRAL_WEEKS * 7),
            notes=f"Must wait {PREGNANCY_DEFERRAL_WEEKS} weeks after pregnancy",
        ),
    }]


def check_tattoos_and_piercings(medical_history: MedicalHistory, current_date: date) -> List[Finding]:
    lifestyle = medical_history.lifestyle
    if not lifestyle or not (lifestyle.recent_tattoos or lifestyle.recent_piercings):
        return []

    return [{
        'reason': f"Recent tattoo/piercing - must wait {TATTOO_PIERCING_DEFERRAL_MONTHS} months",
        'deferral': TemporaryDeferral(
            reason="Recent tattoo or piercing",
            until=add_months(current_date, TATTOO_PIERCING_DEFERRAL_MONTHS),
            notes=f"Must wait {TATTOO_PIERCING_DEFERRAL_MONTHS} months after tattoo or piercing",
        ),
    }]


def check_travel(medical_history: MedicalHistory, current_date: date) -> List[Finding]:
    """Deferral for the first return from a malaria-endemic area in the last 12 months."""
    lifestyle = medical_history.lifestyle
    if not lifestyle or not lifestyle.recent_travel:
        return []

    risky = next(
        (
            travel for travel in lifestyle.recent_travel
            if months_between(travel.date_to, current_date) < TRAVEL_DEFERRAL_MONTHS
            and travel.country.lower() in TRAVEL_DEFERRAL_COUNTRIES
        ),
        None,
    )
    if risky is None:
        return []

    return [{
        'reason': f"Recent travel to high-risk area: {risky.country}",
        'deferral': TemporaryDeferral(
            reason=f"Recent travel to {risky.country}",
            until=add_years(risky.date_to, 1),
            notes="Travel to malaria-endemic area requires 12-month deferral",
        ),
    }]


# Evaluation order is part of the contract: it fixes the order of reasons.
MEDICAL_HISTORY_RULES = (
    check_chronic_conditions,
    check_current_medications,
    check_blood_transfusions,
    check_pregnancy,
    check_tattoos_and_piercings,
    check_travel,
)


def evaluate_medical_history(medical_history: MedicalHistory, current_date: date) -> List[Finding]:
    """Run every medical history rule in order and collect all findings."""
    findings = []
    for rule in MEDICAL_HISTORY_RULES:
        rule_findings = rule(medical_history, current_date)
        if rule_findings:
            logger.debug(f"{rule.__name__} triggered {len(rule_findings)} finding(s)")
        findings.extend(rule_findings)
    return findings
