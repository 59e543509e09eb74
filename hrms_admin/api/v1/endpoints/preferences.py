"""
Console Preferences API Endpoints
"""

from fastapi import APIRouter, Depends

from hrms_admin.core.logging_config import get_logger
from hrms_admin.core.preferences import Preferences
from hrms_admin.core.security import get_preferences
from hrms_admin.models.preferences import PreferencesResponse, PreferencesUpdate

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=PreferencesResponse)
async def read_preferences(preferences: Preferences = Depends(get_preferences)):
    """Sidebar state and the remembered appraisal search term"""
    return preferences.as_dict()


@router.put("", response_model=PreferencesResponse)
async def update_preferences(
    update: PreferencesUpdate,
    preferences: Preferences = Depends(get_preferences)
):
    """Update one or both preferences; omitted fields keep their stored value"""
    if update.sidebar_collapsed is not None:
        preferences.sidebar_collapsed = update.sidebar_collapsed
    if update.appraisal_search_term is not None:
        preferences.appraisal_search_term = update.appraisal_search_term
    logger.debug(f"Preferences updated: {update.model_dump(exclude_none=True)}")
    return preferences.as_dict()
