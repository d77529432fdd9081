# Database models
from .donor import DonorProfileRecord
