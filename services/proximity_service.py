import math
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.models import Seller
from db.schemas import ActiveSellerResponse
from services.profile_service import ProfileService
from services.seller_service import SellerService
from utils import app_logger
from utils.constants import DEFAULT_SEARCH_RADIUS_MILES
from utils.exceptions import InvalidArgumentError, InternalError
from utils.freshness import STALE_THRESHOLD, as_utc, is_location_fresh, utc_now
from utils.geo import calculate_distance, is_valid_coordinate

logger = app_logger.createLogger("app")


class ProximityService:
    """
        Discovery of live sellers around an optional origin.

        A seller is live when it is flagged active and its last location write
        is younger than the staleness threshold. Staleness is evaluated here, at
        read time; nothing in storage expires on its own.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = utc_now,
                 stale_threshold: timedelta = STALE_THRESHOLD):
        self.db = db
        self.clock = clock
        self.stale_threshold = stale_threshold

    @app_logger.functionlogs(log="app")
    def find_active_sellers(self, origin_lat: Optional[float] = None, origin_lng: Optional[float] = None,
                            radius_miles: float = DEFAULT_SEARCH_RADIUS_MILES) -> List[ActiveSellerResponse]:
        has_origin = self._validate_query(origin_lat, origin_lng, radius_miles)

        try:
            sellers = SellerService.fetch_active_sellers(db=self.db)
        except SQLAlchemyError as e:
            app_logger.exceptionlogs(f"Error fetching active sellers, Error: {e}")
            raise InternalError() from e

        now = self.clock()
        results = []
        for seller in sellers:
            if not is_location_fresh(seller.last_location_update, now, self.stale_threshold):
                continue
            if seller.latitude is None or seller.longitude is None:
                continue
            if not is_valid_coordinate(seller.latitude, seller.longitude):
                logger.warning(f"Skipping seller {seller.id} with malformed coordinates")
                continue

            try:
                distance = 0.0
                if has_origin:
                    distance = calculate_distance(origin_lat, origin_lng, seller.latitude, seller.longitude)
                    if not distance <= radius_miles:
                        continue
                results.append(self._to_response(seller, distance))
            except (ValueError, TypeError) as e:
                logger.warning(f"Skipping seller {seller.id} with malformed record, Error: {e}")

        if has_origin:
            # sorted() is stable, equal distances keep scan order
            results = sorted(results, key=lambda item: item.distance)

        logger.info(f"Found {len(results)} active sellers out of {len(sellers)} flagged active")
        return results

    @staticmethod
    def _validate_query(origin_lat, origin_lng, radius_miles) -> bool:
        if (origin_lat is None) != (origin_lng is None):
            raise InvalidArgumentError("lat and lng must be provided together")
        if radius_miles is None or not math.isfinite(radius_miles) or radius_miles <= 0:
            raise InvalidArgumentError("radius must be a positive number of miles")
        if origin_lat is None:
            return False
        if not is_valid_coordinate(origin_lat, origin_lng):
            raise InvalidArgumentError(
                "lat must be within [-90, 90] and lng within [-180, 180]"
            )
        return True

    @staticmethod
    def _to_response(seller: Seller, distance: float) -> ActiveSellerResponse:
        return ActiveSellerResponse(
            id=seller.id,
            seller_id=seller.id,
            latitude=seller.latitude,
            longitude=seller.longitude,
            timestamp=as_utc(seller.last_location_update),
            seller=ProfileService.get_profile(seller),
            distance=distance,
        )
