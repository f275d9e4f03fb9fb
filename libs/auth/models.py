from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class AuthUser(BaseModel):
    """
    Represents a user authenticated by the external identity provider.
    """

    user_id: str = Field(..., alias="sub")
    email: Optional[EmailStr] = None
    role: str = "authenticated"
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")
