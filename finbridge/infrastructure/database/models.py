"""SQLAlchemy ORM models for FinBridge tables"""

import uuid
from sqlalchemy import Column, String, Boolean, Float, DateTime, Date, Integer, Numeric, Text, JSON, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class TransactionRecord(Base):
    """Money movement recorded by the user"""

    __tablename__ = "transactions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    transaction_date = Column(Date, nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(Text, nullable=True)
    transaction_type = Column(String(20), nullable=False, default="expense")
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class GoalRecord(Base):
    """User savings goal"""

    __tablename__ = "goals"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    goal_name = Column(Text, nullable=True)
    goal_type = Column(String(50), nullable=True)
    target_amount = Column(Numeric(12, 2), nullable=False, default=0)
    current_amount = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(String(20), nullable=False, default="active")
    target_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class UserProgressRecord(Base):
    """Lesson completion record"""

    __tablename__ = "user_progress"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    lesson_id = Column(Text, nullable=True)
    progress_status = Column(String(20), nullable=False)
    score = Column(Float, nullable=True)


class ResilienceScore(Base):
    """Append-only history of financial health scores"""

    __tablename__ = "resilience_scores"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    overall_score = Column(Integer, nullable=False)
    literacy_score = Column(Integer, nullable=False)
    savings_score = Column(Integer, nullable=False)
    debt_score = Column(Integer, nullable=False)
    insurance_score = Column(Integer, nullable=False)
    emergency_fund_score = Column(Integer, nullable=False)
    investment_score = Column(Integer, nullable=False)
    calculated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)


class PersonalityProfileRecord(Base):
    """One assessment outcome per user, replaced on reassessment"""

    __tablename__ = "user_personality_profiles"
    __table_args__ = (UniqueConstraint("user_id", name="uq_personality_profile_user"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False)
    personality_type = Column(String(50), nullable=False)
    assessment_answers = Column(JSON, nullable=False)
    assessment_scores = Column(JSON, nullable=False)
    confidence_level = Column(Float, nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class PersonalityChallengeRecord(Base):
    """Challenge generated from an archetype template"""

    __tablename__ = "personality_challenges"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    personality_type = Column(String(50), nullable=False)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    target_amount = Column(Numeric(12, 2), nullable=False, default=0)
    duration_days = Column(Integer, nullable=False)
    difficulty = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    progress = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True)


class SmartAlertRecord(Base):
    """Notification shown to the user"""

    __tablename__ = "smart_alerts"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    alert_type = Column(String(50), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    amount = Column(Numeric(12, 2), nullable=True)
    due_date = Column(Date, nullable=True, index=True)
    priority = Column(String(10), nullable=False, default="medium")
    enabled = Column(Boolean, nullable=False, default=True)
    frequency = Column(String(20), nullable=False, default="monthly")
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True)


class AlertSettingsRecord(Base):
    """Per-user alert preferences"""

    __tablename__ = "alert_settings"
    __table_args__ = (UniqueConstraint("user_id", name="uq_alert_settings_user"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False)
    bill_reminders = Column(Boolean, nullable=False, default=True)
    investment_opportunities = Column(Boolean, nullable=False, default=True)
    goal_progress = Column(Boolean, nullable=False, default=True)
    market_updates = Column(Boolean, nullable=False, default=True)
    emi_reminders = Column(Boolean, nullable=False, default=True)
    budget_alerts = Column(Boolean, nullable=False, default=True)
    emergency_fund_low = Column(Boolean, nullable=False, default=True)
    spending_spikes = Column(Boolean, nullable=False, default=False)
    budget_limit = Column(Numeric(12, 2), nullable=False, default=25000)
    emergency_fund_target = Column(Numeric(12, 2), nullable=False, default=100000)
    updated_at = Column(DateTime(timezone=True), nullable=True)
