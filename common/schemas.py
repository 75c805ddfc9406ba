from datetime import datetime
from typing import Literal, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

class PaymentRequest(BaseModel):
    pos_id: str = Field(min_length=1)
    card_number: str = Field(min_length=1)
    expiry_date: str
    amount: int = Field(gt=0)
    processing_mode: Literal["STANDARD", "DEFERRED", "AUTHORIZE_ONLY"] = "STANDARD"
    date_time: Optional[datetime] = None

class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    pos_id: str
    card_number: str
    expiry_date: str
    amount: int
    processing_mode: str
    card_type: Optional[str] = None
    response_code: str
    date_time: datetime
    response_time: int
    bank_called: bool
    authorized: bool
    author_id: Optional[str] = None

class PaymentCount(BaseModel):
    count: int

class AuthorizationRequest(BaseModel):
    merchant_id: str
    card_number: str
    expiry_date: str
    amount: int

class Authorization(BaseModel):
    authorized: bool
    author_id: Optional[str] = None

class PaymentTrackingEvent(BaseModel):
    id: Optional[str] = None
    pos_id: str
    card_type: Optional[str] = None
    amount: int
    processing_mode: str
    response_code: str
    response_time: Optional[int] = None
    bank_called: bool
    authorized: bool
    author_id: Optional[str] = None
    date_time: str
