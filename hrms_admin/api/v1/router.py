from fastapi import APIRouter
from hrms_admin.api.v1.endpoints import (
    stationery, appraisals, employees, leave, letters, holidays, provisions, preferences
)

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(stationery.router, prefix="/stationery", tags=["Stationery"])
api_router.include_router(appraisals.router, prefix="/appraisals", tags=["Appraisals"])
api_router.include_router(employees.router, prefix="/employees", tags=["Employees"])
api_router.include_router(leave.router, prefix="/leave-requests", tags=["Leave Requests"])
api_router.include_router(letters.router, prefix="/letters", tags=["Letters"])
api_router.include_router(holidays.router, prefix="/holidays", tags=["Holidays"])
api_router.include_router(provisions.router, prefix="/admin-provisions", tags=["Admin Provisions"])
api_router.include_router(preferences.router, prefix="/preferences", tags=["Preferences"])
