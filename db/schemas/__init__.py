# Auth schemas
from db.schemas.auth import CurrentCaller

# Location schemas
from db.schemas.location import LocationUpdate, ActiveUpdate, LocationPatch, LocationStateResponse

# Seller schemas
from db.schemas.seller import SellerProfile, ActiveSellerResponse

__all__ = [
    # Auth
    "CurrentCaller",

    # Location
    "LocationUpdate", "ActiveUpdate", "LocationPatch", "LocationStateResponse",

    # Seller
    "SellerProfile", "ActiveSellerResponse",
]
