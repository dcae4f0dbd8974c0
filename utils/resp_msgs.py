STATUS_500_MSG = "Something went wrong. Please try again later."
SELLER_NOT_FOUND = "Seller profile not found"
SELLER_ACCESS_REQUIRED = "Seller access required"
NOT_SELLER_OWNER = "You can only update your own seller profile"
SELLER_INACTIVE = "Seller is not active. Activate before sharing a location"
INVALID_TOKEN = "Invalid token"
TOKEN_EXPIRED = "Token expired"
INVALID_USER_AUTH = "Invalid user authentication"
LOCATION_UPDATED = "Location Updated"
ACTIVE_SELLERS = "Active sellers"
