"""
Response models for command results
"""

from typing import Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error response model"""
    message: str
    error_code: Optional[str] = None
    details: Optional[dict] = None
    fatal: bool = False
