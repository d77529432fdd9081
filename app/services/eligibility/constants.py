"""Thresholds and keyword tables for whole-blood donor eligibility."""

MINIMUM_AGE = 16
MAXIMUM_AGE = 100

DONATION_INTERVAL_DAYS = 56  # 8 weeks between whole blood donations
MEDICATION_DEFERRAL_DAYS = 30
TRANSFUSION_DEFERRAL_MONTHS = 12
PREGNANCY_DEFERRAL_WEEKS = 6
TATTOO_PIERCING_DEFERRAL_MONTHS = 3
TRAVEL_DEFERRAL_MONTHS = 12

# Matched as case-insensitive substrings of the reported condition.
PERMANENT_DEFERRAL_CONDITIONS = frozenset({
    'hiv',
    'hepatitis b',
    'hepatitis-b',
    'hepatitis c',
    'hepatitis-c',
    'variant creutzfeldt-jakob disease',
    'variant-creutzfeldt-jakob-disease',
    'babesiosis',
    'chagas disease',
    'chagas-disease',
    'leishmaniasis',
})

# Matched as case-insensitive substrings of the medication name.
DEFERRAL_MEDICATIONS = frozenset({
    'isotretinoin',
    'finasteride',
    'dutasteride',
    'warfarin',
    'heparin',
    'aspirin',  # context-dependent
})

# Matched against the whole lower-cased country name.
# TODO: replace the placeholder with the malaria-endemic country list from the medical team.
TRAVEL_DEFERRAL_COUNTRIES = frozenset({
    'malaria-endemic-countries',
})
