"""
Pydantic schemas for the per-user session endpoints.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from beeconta.schemas.auth import UserProfile
from beeconta.schemas.companies import CompanyResponse


class SessionResponse(BaseModel):
    """
    Snapshot of the user's session: profile, reachable companies and the
    company currently selected.
    """
    user: Optional[UserProfile] = Field(None, description="Null when signed out")
    companies: List[CompanyResponse] = Field(default_factory=list)
    active_company: Optional[CompanyResponse] = None
    error: Optional[str] = Field(
        None,
        description="Last load error, if any",
        examples=["Failed to load available companies"]
    )


class ActiveCompanyRequest(BaseModel):
    empresa_id: str = Field(..., description="Company to activate")
