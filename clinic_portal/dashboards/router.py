"""
Dashboard Router - one landing page per staff role.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth.dependencies import require_operation
from ..auth.session import AuthSession
from ..core.permissions import Operation
from ..database import get_db
from .schemas import AdminDashboard, DoctorDashboard, ReceptionistDashboard
from . import service

router = APIRouter()

@router.get("/admin", response_model=AdminDashboard)
def admin_dashboard_route(
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_operation(Operation.VIEW_ADMIN_DASHBOARD)),
):
    return service.get_admin_dashboard(db)

@router.get("/doctor", response_model=DoctorDashboard)
def doctor_dashboard_route(
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_operation(Operation.VIEW_DOCTOR_DASHBOARD)),
):
    return service.get_doctor_dashboard(db, session.subject_id)

@router.get("/receptionist", response_model=ReceptionistDashboard)
def receptionist_dashboard_route(
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_operation(Operation.VIEW_RECEPTIONIST_DASHBOARD)),
):
    return service.get_receptionist_dashboard(db, session.subject_id)
