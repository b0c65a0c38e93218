"""
Dashboard service - read-only aggregation for the role dashboards.
"""
import logging
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..auth.exceptions import NotFoundException
from ..auth.models import User, UserRole
from .schemas import (
    AdminDashboard, DoctorDashboard, ReceptionistDashboard, RecentRegistration, ScheduleSlot, StaffInfo
)

# Set up logging
logger = logging.getLogger(__name__)

RECENT_REGISTRATIONS_LIMIT = 10

# Consultation hours; the lunch hour is not bookable
CONSULTATION_SLOTS = ["08:00", "09:00", "10:00", "11:00", "13:00", "14:00", "15:00", "16:00"]

def get_admin_dashboard(db: Session) -> AdminDashboard:
    """
    Count staff accounts by role and activity, plus the newest registrations.

    Args:
        db: Database session

    Returns:
        AdminDashboard statistics
    """
    rows = (
        db.query(User.role, User.is_active, func.count(User.id))
        .group_by(User.role, User.is_active)
        .all()
    )

    total_users = 0
    active_users = 0
    per_role = {role: 0 for role in UserRole}
    for role, is_active, count in rows:
        total_users += count
        per_role[UserRole(role)] += count
        if is_active:
            active_users += count

    recent = (
        db.query(User)
        .order_by(User.created_at.desc(), User.id.desc())
        .limit(RECENT_REGISTRATIONS_LIMIT)
        .all()
    )

    return AdminDashboard(
        total_users=total_users,
        total_doctors=per_role[UserRole.DOCTOR],
        total_receptionists=per_role[UserRole.RECEPTIONIST],
        active_users=active_users,
        recent_registrations=[RecentRegistration.model_validate(user) for user in recent],
    )

def get_doctor_dashboard(db: Session, user_id: int) -> DoctorDashboard:
    """
    Doctor profile and the day's consultation slots.

    No appointment store exists, so every slot is open.

    Raises:
        NotFoundException: If the doctor row is gone
    """
    doctor = db.query(User).filter(User.id == user_id, User.role == UserRole.DOCTOR).first()
    if doctor is None:
        raise NotFoundException("Doctor not found")

    return DoctorDashboard(
        doctor_info=StaffInfo.model_validate(doctor),
        today_schedule=[ScheduleSlot(time=slot) for slot in CONSULTATION_SLOTS],
    )

def get_receptionist_dashboard(db: Session, user_id: int) -> ReceptionistDashboard:
    """
    Receptionist profile and front desk counters.

    Raises:
        NotFoundException: If the receptionist row is gone
    """
    receptionist = (
        db.query(User)
        .filter(User.id == user_id, User.role == UserRole.RECEPTIONIST, User.is_active.is_(True))
        .first()
    )
    if receptionist is None:
        raise NotFoundException("Receptionist not found")

    # Appointment counters stay at zero until an appointment store exists
    return ReceptionistDashboard(
        receptionist_info=StaffInfo.model_validate(receptionist),
        pending_appointments=0,
        today_appointments=0,
    )
