from pydantic import BaseModel
from typing import Optional, Dict, Any


class ErrorResponse(BaseModel):
    error: str
    code: str
    field: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    request_id: Optional[str] = None
