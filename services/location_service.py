from datetime import datetime, timedelta
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.models import Seller
from db.schemas import CurrentCaller, LocationStateResponse
from services.seller_service import SellerService
from utils import app_logger, resp_msgs
from utils.exceptions import NotFoundError, PermissionDeniedError, InvalidArgumentError, VendorInactiveError, \
    InternalError
from utils.freshness import STALE_THRESHOLD, as_utc, is_location_fresh, utc_now
from utils.geo import is_valid_coordinate
from utils.permissions import PermissionChecker

logger = app_logger.createLogger("app")


class LocationService:
    """
        Mutations of a seller's location state.

        Every write is a single UPDATE on the seller row, so coordinates and
        last_location_update always change together. A location write never
        lands on an inactive seller: it must be activated first.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = utc_now,
                 stale_threshold: timedelta = STALE_THRESHOLD):
        self.db = db
        self.clock = clock
        self.stale_threshold = stale_threshold

    @app_logger.functionlogs(log="app")
    def set_location(self, caller: CurrentCaller, seller_id: int, latitude: float,
                     longitude: float) -> LocationStateResponse:
        self._validate_coordinates(latitude, longitude)
        self._get_owned_seller(caller, seller_id)

        values = {
            "latitude": float(latitude),
            "longitude": float(longitude),
            "last_location_update": self.clock(),
        }
        if not self._write(seller_id, values, require_active=True):
            if self._load_seller(seller_id) is None:
                raise NotFoundError(resp_msgs.SELLER_NOT_FOUND)
            logger.info(f"Rejected location update for inactive seller {seller_id}")
            raise VendorInactiveError(resp_msgs.SELLER_INACTIVE)

        logger.info(f"Location updated for seller {seller_id}")
        return self._current_state(seller_id)

    @app_logger.functionlogs(log="app")
    def set_active(self, caller: CurrentCaller, seller_id: int, is_active: bool) -> LocationStateResponse:
        self._get_owned_seller(caller, seller_id)

        values = {"is_active": bool(is_active)}
        if not is_active:
            values.update(latitude=None, longitude=None, last_location_update=None)
        if not self._write(seller_id, values):
            raise NotFoundError(resp_msgs.SELLER_NOT_FOUND)

        logger.info(f"Seller {seller_id} {'activated' if is_active else 'deactivated'}")
        return self._current_state(seller_id)

    @app_logger.functionlogs(log="app")
    def update_location(self, caller: CurrentCaller, seller_id: int, latitude: Optional[float] = None,
                        longitude: Optional[float] = None,
                        is_active: Optional[bool] = None) -> LocationStateResponse:
        """
            Combined update: location and/or active flag in one call.
            Deactivation wins over a location sent in the same request.
        """
        has_location = latitude is not None or longitude is not None
        if has_location and (latitude is None or longitude is None):
            raise InvalidArgumentError("latitude and longitude must be provided together")
        if not has_location and is_active is None:
            raise InvalidArgumentError("Provide a location, is_active or both")

        if is_active is None:
            return self.set_location(caller, seller_id, latitude, longitude)
        if not is_active or not has_location:
            return self.set_active(caller, seller_id, is_active)

        self._validate_coordinates(latitude, longitude)
        self._get_owned_seller(caller, seller_id)
        values = {
            "is_active": True,
            "latitude": float(latitude),
            "longitude": float(longitude),
            "last_location_update": self.clock(),
        }
        if not self._write(seller_id, values):
            raise NotFoundError(resp_msgs.SELLER_NOT_FOUND)

        logger.info(f"Seller {seller_id} activated with location")
        return self._current_state(seller_id)

    @app_logger.functionlogs(log="app")
    def get_location_state(self, caller: CurrentCaller, seller_id: int) -> LocationStateResponse:
        seller = self._get_owned_seller(caller, seller_id)
        return self._to_state(seller)

    @staticmethod
    def _validate_coordinates(latitude, longitude):
        if isinstance(latitude, bool) or isinstance(longitude, bool) or \
                not is_valid_coordinate(latitude, longitude):
            raise InvalidArgumentError(
                "latitude must be within [-90, 90] and longitude within [-180, 180]"
            )

    def _get_owned_seller(self, caller: CurrentCaller, seller_id: int) -> Seller:
        if not PermissionChecker.is_seller(caller):
            raise PermissionDeniedError(resp_msgs.SELLER_ACCESS_REQUIRED)
        seller = self._load_seller(seller_id)
        if seller is None:
            raise NotFoundError(resp_msgs.SELLER_NOT_FOUND)
        if not PermissionChecker.owns_seller(caller, seller):
            raise PermissionDeniedError(resp_msgs.NOT_SELLER_OWNER)
        return seller

    def _load_seller(self, seller_id: int) -> Optional[Seller]:
        try:
            return SellerService.get_seller_by_id(db=self.db, seller_id=seller_id)
        except SQLAlchemyError as e:
            app_logger.exceptionlogs(f"Error loading seller {seller_id}, Error: {e}")
            raise InternalError() from e

    def _write(self, seller_id: int, values: dict, require_active: bool = False) -> bool:
        try:
            return SellerService.update_seller(
                db=self.db, seller_id=seller_id, values=values, require_active=require_active
            ) > 0
        except SQLAlchemyError as e:
            self.db.rollback()
            app_logger.exceptionlogs(f"Error updating location state of seller {seller_id}, Error: {e}")
            raise InternalError() from e

    def _current_state(self, seller_id: int) -> LocationStateResponse:
        seller = self._load_seller(seller_id)
        if seller is None:
            raise NotFoundError(resp_msgs.SELLER_NOT_FOUND)
        return self._to_state(seller)

    def _to_state(self, seller: Seller) -> LocationStateResponse:
        fresh = seller.is_active and is_location_fresh(
            seller.last_location_update, self.clock(), self.stale_threshold
        )
        return LocationStateResponse(
            seller_id=seller.id,
            is_active=seller.is_active,
            latitude=seller.latitude,
            longitude=seller.longitude,
            last_location_update=as_utc(seller.last_location_update) if seller.last_location_update else None,
            is_fresh=fresh,
        )
