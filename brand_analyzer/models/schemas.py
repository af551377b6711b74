from datetime import datetime
from pydantic import BaseModel, ConfigDict
from typing import List, Optional

class AnalyzeRequest(BaseModel):
    # validated by the pipeline so a bad url maps to 400, not 422
    url: Optional[str] = None

class WebsiteUpdate(BaseModel):
    brand_name: Optional[str] = None
    description: Optional[str] = None

class WebsiteRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    brand_name: str
    description: str
    timestamp: datetime

class RecordResponse(BaseModel):
    message: str
    data: WebsiteRecord

class RecordListResponse(BaseModel):
    message: str
    data: List[WebsiteRecord] = []

class ErrorResponse(BaseModel):
    error: str
