from fastapi import Depends

from db.models import Seller
from db.schemas import CurrentCaller
from utils import resp_msgs
from utils.enums import UserType
from utils.dependencies import get_current_user
from utils.exceptions import PermissionDeniedError


class PermissionChecker:
    """Permission checking utility functions"""

    @staticmethod
    def is_seller(caller: CurrentCaller) -> bool:
        return caller.role == UserType.SELLER

    @staticmethod
    def owns_seller(caller: CurrentCaller, seller: Seller) -> bool:
        return seller.user_id == caller.user_id


class PermissionDependency:
    """FastAPI dependencies for API routes (raises 403)"""

    @staticmethod
    def require_seller():
        def _check(current_user: CurrentCaller = Depends(get_current_user)) -> CurrentCaller:
            if not PermissionChecker.is_seller(current_user):
                raise PermissionDeniedError(resp_msgs.SELLER_ACCESS_REQUIRED)
            return current_user

        return _check
