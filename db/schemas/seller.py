from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict


class SellerProfile(BaseModel):
    business_name: str
    owner_name: str
    phone: str
    description: Optional[str] = None
    offerings: List[str] = []

    model_config = ConfigDict(from_attributes=True)


class ActiveSellerResponse(BaseModel):
    id: int
    seller_id: int
    latitude: float
    longitude: float
    timestamp: datetime
    seller: SellerProfile
    distance: float
