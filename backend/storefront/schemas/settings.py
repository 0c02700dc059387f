from enum import Enum
from typing import Optional

from pydantic import BaseModel


class SettingKey(str, Enum):
    """The fixed set of business settings stored on the singleton record."""

    WHATSAPP_NUMBER = "whatsapp_number"
    BUSINESS_NAME = "business_name"
    BUSINESS_EMAIL = "business_email"


class SettingOut(BaseModel):
    key: str
    value: str


class SettingUpdate(BaseModel):
    # Both optional so that missing fields surface as a 400 from the store
    # rather than a 422 from request validation.
    key: Optional[str] = None
    value: Optional[str] = None


class SettingUpdateOut(BaseModel):
    success: bool = True
