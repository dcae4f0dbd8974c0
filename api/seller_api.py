from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from starlette.responses import JSONResponse

from db.db_conn import get_db
from db.schemas import CurrentCaller, LocationUpdate, ActiveUpdate, LocationPatch, LocationStateResponse
from services.location_service import LocationService
from services.proximity_service import ProximityService
from utils import app_logger, resp_msgs
from utils.constants import DEFAULT_SEARCH_RADIUS_MILES
from utils.dependencies import get_clock
from utils.exceptions import LocatorError, NotFoundError
from utils.permissions import PermissionDependency

router = APIRouter(prefix="/sellers", tags=["sellers"])

logger = app_logger.createLogger("app")


def get_location_service(db: Session = Depends(get_db), clock=Depends(get_clock)) -> LocationService:
    return LocationService(db=db, clock=clock)


def get_proximity_service(db: Session = Depends(get_db), clock=Depends(get_clock)) -> ProximityService:
    return ProximityService(db=db, clock=clock)


def _own_seller_id(current_user: CurrentCaller) -> int:
    if current_user.seller_id is None:
        raise NotFoundError(resp_msgs.SELLER_NOT_FOUND)
    return current_user.seller_id


def _location_response(state: LocationStateResponse, message: str):
    return JSONResponse(
        content={
            "status": "success",
            "message": message,
            "location": state.model_dump(mode="json")
        },
        status_code=status.HTTP_200_OK
    )


def _internal_error():
    return JSONResponse(
        content={"status": "error", "message": resp_msgs.STATUS_500_MSG},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


@router.get("/active", status_code=status.HTTP_200_OK)
def active_sellers(lat: Optional[float] = Query(None, ge=-90, le=90, allow_inf_nan=False),
                   lng: Optional[float] = Query(None, ge=-180, le=180, allow_inf_nan=False),
                   radius: float = Query(DEFAULT_SEARCH_RADIUS_MILES, gt=0, allow_inf_nan=False),
                   proximity_service: ProximityService = Depends(get_proximity_service)):
    """Live sellers, nearest first when an origin is given."""
    try:
        sellers = proximity_service.find_active_sellers(origin_lat=lat, origin_lng=lng, radius_miles=radius)
        return JSONResponse(
            content={
                "status": "success",
                "message": resp_msgs.ACTIVE_SELLERS,
                "sellers": [seller.model_dump(mode="json") for seller in sellers]
            },
            status_code=status.HTTP_200_OK
        )
    except LocatorError:
        raise
    except Exception as e:
        app_logger.exceptionlogs(f"Error while getting active sellers, Error: {e}")
        return _internal_error()


@router.get("/me/location", status_code=status.HTTP_200_OK)
def my_location(current_user: CurrentCaller = Depends(PermissionDependency.require_seller()),
                location_service: LocationService = Depends(get_location_service)):
    try:
        state = location_service.get_location_state(current_user, _own_seller_id(current_user))
        return _location_response(state, "Seller location state")
    except LocatorError:
        raise
    except Exception as e:
        app_logger.exceptionlogs(f"Error while getting seller location, Error: {e}")
        return _internal_error()


@router.put("/me/location", status_code=status.HTTP_200_OK)
def set_my_location(location_data: LocationUpdate,
                    current_user: CurrentCaller = Depends(PermissionDependency.require_seller()),
                    location_service: LocationService = Depends(get_location_service)):
    try:
        state = location_service.set_location(
            current_user, _own_seller_id(current_user), location_data.latitude, location_data.longitude
        )
        return _location_response(state, resp_msgs.LOCATION_UPDATED)
    except LocatorError:
        raise
    except Exception as e:
        app_logger.exceptionlogs(f"Error while updating seller location, Error: {e}")
        return _internal_error()


@router.put("/me/active", status_code=status.HTTP_200_OK)
def set_my_active(active_data: ActiveUpdate,
                  current_user: CurrentCaller = Depends(PermissionDependency.require_seller()),
                  location_service: LocationService = Depends(get_location_service)):
    try:
        state = location_service.set_active(current_user, _own_seller_id(current_user), active_data.is_active)
        message = "Seller activated" if state.is_active else "Seller deactivated"
        return _location_response(state, message)
    except LocatorError:
        raise
    except Exception as e:
        app_logger.exceptionlogs(f"Error while updating seller active state, Error: {e}")
        return _internal_error()


@router.patch("/location", status_code=status.HTTP_200_OK)
def update_location(patch_data: LocationPatch,
                    current_user: CurrentCaller = Depends(PermissionDependency.require_seller()),
                    location_service: LocationService = Depends(get_location_service)):
    """Location and active flag in a single call."""
    try:
        state = location_service.update_location(
            current_user,
            _own_seller_id(current_user),
            latitude=patch_data.latitude,
            longitude=patch_data.longitude,
            is_active=patch_data.is_active,
        )
        return _location_response(state, resp_msgs.LOCATION_UPDATED)
    except LocatorError:
        raise
    except Exception as e:
        app_logger.exceptionlogs(f"Error while updating seller location, Error: {e}")
        return _internal_error()
