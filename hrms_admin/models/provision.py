"""
Admin Provision Models for the HRMS Admin Console
"""

from pydantic import BaseModel
from typing import Optional, Union


class AdminProvisionCreate(BaseModel):
    employee: Union[int, str]
    bank_account_paper: bool = False
    sim_card: bool = False
    visiting_card: bool = False
    placement: bool = False


class AdminProvisionUpdate(BaseModel):
    bank_account_paper: Optional[bool] = None
    sim_card: Optional[bool] = None
    visiting_card: Optional[bool] = None
    placement: Optional[bool] = None
