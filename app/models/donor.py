from sqlalchemy import Column, Integer, String, Date, Boolean, DateTime, JSON, Text
from sqlalchemy.sql import func
from app.database.database import Base

class DonorProfileRecord(Base):
    __tablename__ = "donor_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, unique=True, index=True, nullable=False)  # identity provider subject
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    date_of_birth = Column(Date, nullable=False)
    blood_type = Column(String(3), nullable=True)
    medical_history = Column(JSON, nullable=True)
    last_donation_date = Column(Date, nullable=True)
    total_donations = Column(Integer, default=0, nullable=False)

    # Cache of the most recent eligibility verdict, never read by the evaluator
    is_deferred_temporary = Column(Boolean, default=False, nullable=False)
    is_deferred_permanent = Column(Boolean, default=False, nullable=False)
    deferral_reason = Column(Text, nullable=True)
    deferral_end_date = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
