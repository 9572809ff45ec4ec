from typing import Dict, Optional

from pydantic import BaseModel


class UsageResponse(BaseModel):
    """Root usage description"""
    message: str
    usage: Dict[str, str]
    example: str
    engine: str
    ytdlp_version: str


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    timestamp: str
    engine: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error body shared by every failure path"""
    error: str
    message: Optional[str] = None
