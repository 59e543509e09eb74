from pydantic import BaseModel
from typing import Optional


class PreferencesResponse(BaseModel):
    sidebar_collapsed: bool
    appraisal_search_term: str


class PreferencesUpdate(BaseModel):
    sidebar_collapsed: Optional[bool] = None
    appraisal_search_term: Optional[str] = None
