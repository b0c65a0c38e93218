"""
Dashboard Schemas - role-specific landing page payloads.
"""
from typing import List, Optional
from pydantic import BaseModel
from datetime import datetime
from ..auth.models import UserRole

class RecentRegistration(BaseModel):
    id: int
    full_name: str
    role: UserRole
    created_at: datetime

    class Config:
        from_attributes = True

class AdminDashboard(BaseModel):
    """
    Clinic-wide staff statistics for administrators.
    """
    total_users: int
    total_doctors: int
    total_receptionists: int
    active_users: int
    recent_registrations: List[RecentRegistration]

class StaffInfo(BaseModel):
    id: int
    full_name: str
    email: str

    class Config:
        from_attributes = True

class ScheduleSlot(BaseModel):
    time: str
    patient_name: Optional[str] = None

class DoctorDashboard(BaseModel):
    doctor_info: StaffInfo
    today_schedule: List[ScheduleSlot]

class ReceptionistDashboard(BaseModel):
    receptionist_info: StaffInfo
    pending_appointments: int
    today_appointments: int
