# 📄 File: care_scheduler/modules/care_management/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how care tasks are stored in the database, and how the scheduler
# reads the plant records it needs (watering frequency, last watering).
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for the care_tasks table (owned by this module) and
# the plants table (owned by the plant module, read-only here), with check
# constraints and indexes matching the scheduler's query patterns.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - care_scheduler.shared.infrastructure.database.connection (Base)
#
# 🔄 Connected Modules / Calls From:
# - task_store_impl.py and plant_directory_impl.py
# - Alembic migrations (metadata)

"""
SQLAlchemy Models for Care Management

Models:
- PlantModel: read-only projection of the plants table
- CareTaskModel: care tasks, with the due day stored next to the due timestamp
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.sql import func

from care_scheduler.shared.infrastructure.database.connection import Base

TASK_TYPES = ("water", "fertilize", "repot", "light", "other")


# =============================================================================
# PLANT MODEL (read-only)
# =============================================================================

class PlantModel(Base):
    """
    Plants as seen by the scheduler. Rows are written by the plant module.
    """
    __tablename__ = "plants"

    id = Column(Integer, primary_key=True, autoincrement=True, comment="Plant identifier")
    name = Column(String(200), nullable=True, comment="Plant display name")
    watering_frequency_days = Column(
        Integer,
        nullable=True,
        comment="Days between waterings",
    )
    last_watered_date = Column(Date, nullable=True, comment="Day of the last recorded watering")
    auto_watering = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default="false",
        comment="Plant enrolled in automatic watering task generation",
    )
    reminder_time = Column(String(5), nullable=True, comment="Reminder time of day (HH:MM)")

    __table_args__ = (
        CheckConstraint(
            "watering_frequency_days IS NULL OR watering_frequency_days > 0",
            name="ck_plants_watering_frequency_positive",
        ),
        Index("ix_plants_auto_watering", "auto_watering"),
    )

    def __repr__(self) -> str:
        return f"<PlantModel(id={self.id}, frequency={self.watering_frequency_days})>"


# =============================================================================
# CARE TASK MODEL
# =============================================================================

class CareTaskModel(Base):
    """
    One care task. ``due_day`` is the normalized day of ``due_date`` and is
    written together with it.
    """
    __tablename__ = "care_tasks"

    id = Column(Integer, primary_key=True, autoincrement=True, comment="Task identifier")
    plant_id = Column(
        Integer,
        ForeignKey("plants.id", ondelete="CASCADE"),
        nullable=False,
        comment="Plant this task belongs to",
    )
    type = Column(String(20), nullable=False, comment="water, fertilize, repot, light or other")
    description = Column(Text, nullable=False, comment="What needs doing")
    due_date = Column(DateTime(timezone=True), nullable=True, comment="Due timestamp")
    due_day = Column(Date, nullable=True, comment="Calendar day of due_date in the reference timezone")
    completed = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default="false",
        comment="Completion flag (never reset)",
    )
    date_completed = Column(DateTime(timezone=True), nullable=True, comment="Completion timestamp")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="Row creation timestamp",
    )

    __table_args__ = (
        CheckConstraint(
            "type IN ('water', 'fertilize', 'repot', 'light', 'other')",
            name="ck_care_tasks_type",
        ),
        CheckConstraint("length(description) > 0", name="ck_care_tasks_description_not_empty"),
        Index("ix_care_tasks_plant_type_day", "plant_id", "type", "due_day"),
        Index("ix_care_tasks_completed_day", "completed", "due_day"),
        Index("ix_care_tasks_due_day", "due_day"),
    )

    def __repr__(self) -> str:
        return f"<CareTaskModel(id={self.id}, plant_id={self.plant_id}, type={self.type}, due_day={self.due_day})>"
