"""
Pydantic schemas for companies
"""

from pydantic import BaseModel
import uuid


class CompanyCreate(BaseModel):
    """Company add / rename form"""
    name: str = ""


class CompanyResponse(BaseModel):
    """Company response model"""
    id: uuid.UUID
    name: str

    model_config = {"from_attributes": True}


class CompanySummary(CompanyResponse):
    """Company list entry with users waiting for review"""
    review_count: int = 0
