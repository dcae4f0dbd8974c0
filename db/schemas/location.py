from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field, model_validator


class LocationUpdate(BaseModel):
    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False)


class ActiveUpdate(BaseModel):
    is_active: bool


class LocationPatch(BaseModel):
    latitude: Optional[float] = Field(None, ge=-90, le=90, allow_inf_nan=False)
    longitude: Optional[float] = Field(None, ge=-180, le=180, allow_inf_nan=False)
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def check_coordinate_pair(self):
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be provided together")
        if self.latitude is None and self.is_active is None:
            raise ValueError("Provide a location, is_active or both")
        return self


class LocationStateResponse(BaseModel):
    seller_id: int
    is_active: bool
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    last_location_update: Optional[datetime] = None
    is_fresh: bool
