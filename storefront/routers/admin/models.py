"""
Admin API Pydantic Models

Fields are optional on purpose: the directory service reports missing values
as ``invalid-argument`` instead of the framework's 422. Aliases accept the
camelCase names the admin frontend sends.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _AdminRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ==================== USER MODELS ====================

class CreateUserRequest(_AdminRequest):
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


class UpdateUserRequest(_AdminRequest):
    name: Optional[str] = None
    password: Optional[str] = None
    disabled: Optional[bool] = None


class UpdatePasswordRequest(_AdminRequest):
    password: Optional[str] = None


class ToggleStatusRequest(_AdminRequest):
    new_status: Optional[str] = Field(None, alias="newStatus")


class PasswordResetRequest(_AdminRequest):
    email: Optional[str] = None
    redirect_url: Optional[str] = Field(None, alias="redirectUrl")
