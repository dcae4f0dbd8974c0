from enum import Enum

class UserType(str, Enum):
    SEARCHER = "searcher"
    SELLER = "seller"
    ADMIN = "admin"
