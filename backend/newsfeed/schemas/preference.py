"""
Preference related schemas
"""

from typing import List

from pydantic import BaseModel, Field

from .article import CategoryResponse


class PreferencesResponse(BaseModel):
    """Active categories and the ones the reader selected"""
    categories: List[CategoryResponse]
    selected: List[int]


class PreferencesUpdate(BaseModel):
    """Full replacement of the reader's categories"""
    categories: List[int] = Field(..., min_length=1)
