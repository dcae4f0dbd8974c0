from typing import Optional

from pydantic import BaseModel

from utils.enums import UserType


class CurrentCaller(BaseModel):
    """Identity resolved from a bearer token."""
    user_id: int
    seller_id: Optional[int] = None
    role: UserType
