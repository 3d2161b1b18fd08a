"""
Pydantic schemas for retrieval criteria
"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel


class DateRange(BaseModel):
    """
    Inclusive time window. A reversed window matches nothing.
    """
    start: datetime
    end: datetime


class FilterCriteria(BaseModel):
    """
    Pydantic schema for item filtering. Every field is optional and
    an empty list means "no restriction".
    """
    query: str = ""
    categories: List[str] = []
    sources: List[str] = []
    priorities: List[str] = []
    date_range: Optional[DateRange] = None
    hashtags: List[str] = []
    sentiment: Optional[Literal["positive", "negative", "neutral"]] = None
    authors: List[str] = []
