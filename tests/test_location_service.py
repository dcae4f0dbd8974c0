"""State transitions of a seller's location."""

from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError

from db.models import Seller
from db.schemas import CurrentCaller
from services.location_service import LocationService
from services.seller_service import SellerService
from utils.enums import UserType
from utils.exceptions import NotFoundError, PermissionDeniedError, InvalidArgumentError, VendorInactiveError, \
    InternalError

from conftest import T0


@pytest.fixture
def service(db, clock) -> LocationService:
    return LocationService(db=db, clock=clock)


def reload(db, seller_id: int) -> Seller:
    db.expire_all()
    return db.query(Seller).filter(Seller.id == seller_id).one()


class TestSetLocation:

    def test_writes_coordinates_and_timestamp(self, service, db, make_seller, caller_for) -> None:
        seller = make_seller(is_active=True)

        state = service.set_location(caller_for(seller), seller.id, 40.0, -75.0)

        assert state.latitude == 40.0
        assert state.longitude == -75.0
        assert state.last_location_update == T0
        assert state.is_active is True
        assert state.is_fresh is True
        stored = reload(db, seller.id)
        assert (stored.latitude, stored.longitude) == (40.0, -75.0)
        assert stored.last_location_update is not None

    def test_keeps_active_flag(self, service, db, make_seller, caller_for) -> None:
        seller = make_seller(is_active=True)
        service.set_location(caller_for(seller), seller.id, 10.0, 10.0)
        assert reload(db, seller.id).is_active is True

    def test_overwrites_previous_location(self, service, clock, make_seller, caller_for) -> None:
        seller = make_seller(is_active=True)
        service.set_location(caller_for(seller), seller.id, 40.0, -75.0)
        clock.advance(minutes=3)

        state = service.set_location(caller_for(seller), seller.id, 41.0, -74.0)

        assert (state.latitude, state.longitude) == (41.0, -74.0)
        assert state.last_location_update == T0 + timedelta(minutes=3)

    def test_rejected_when_inactive(self, service, db, make_seller, caller_for) -> None:
        seller = make_seller(is_active=False)

        with pytest.raises(VendorInactiveError):
            service.set_location(caller_for(seller), seller.id, 40.0, -75.0)

        stored = reload(db, seller.id)
        assert stored.latitude is None
        assert stored.longitude is None
        assert stored.last_location_update is None

    @pytest.mark.parametrize("lat, lng", [
        (91.0, 0.0), (-90.5, 0.0), (0.0, 181.0), (float("nan"), 0.0), (0.0, float("inf")), ("abc", 1.0), (True, 1.0),
    ])
    def test_rejects_invalid_coordinates(self, service, db, make_seller, caller_for, lat, lng) -> None:
        seller = make_seller(is_active=True)

        with pytest.raises(InvalidArgumentError):
            service.set_location(caller_for(seller), seller.id, lat, lng)

        assert reload(db, seller.id).latitude is None

    def test_unknown_seller(self, service) -> None:
        caller = CurrentCaller(user_id=1, seller_id=999, role=UserType.SELLER)
        with pytest.raises(NotFoundError):
            service.set_location(caller, 999, 40.0, -75.0)

    def test_other_sellers_record_is_denied(self, service, db, make_seller, caller_for) -> None:
        mine = make_seller(is_active=True)
        theirs = make_seller(business_name="Rival", is_active=True)

        with pytest.raises(PermissionDeniedError):
            service.set_location(caller_for(mine), theirs.id, 40.0, -75.0)

        assert reload(db, theirs.id).latitude is None

    def test_searcher_is_denied(self, service, make_seller) -> None:
        seller = make_seller(is_active=True)
        caller = CurrentCaller(user_id=seller.user_id, seller_id=seller.id, role=UserType.SEARCHER)
        with pytest.raises(PermissionDeniedError):
            service.set_location(caller, seller.id, 40.0, -75.0)


class TestSetActive:

    def test_activate_without_location(self, service, make_seller, caller_for) -> None:
        seller = make_seller(is_active=False)

        state = service.set_active(caller_for(seller), seller.id, True)

        assert state.is_active is True
        assert state.latitude is None
        assert state.is_fresh is False

    def test_activate_keeps_existing_location(self, service, make_seller, caller_for) -> None:
        seller = make_seller(is_active=True, latitude=40.0, longitude=-75.0, last_location_update=T0)

        state = service.set_active(caller_for(seller), seller.id, True)

        assert (state.latitude, state.longitude) == (40.0, -75.0)
        assert state.is_fresh is True

    def test_deactivate_clears_location(self, service, db, make_seller, caller_for) -> None:
        seller = make_seller(is_active=True, latitude=40.0, longitude=-75.0, last_location_update=T0)

        state = service.set_active(caller_for(seller), seller.id, False)

        assert state.is_active is False
        assert state.latitude is None
        assert state.longitude is None
        assert state.last_location_update is None
        stored = reload(db, seller.id)
        assert stored.latitude is None and stored.longitude is None
        assert stored.last_location_update is None

    def test_deactivate_already_inactive(self, service, make_seller, caller_for) -> None:
        seller = make_seller(is_active=False)
        state = service.set_active(caller_for(seller), seller.id, False)
        assert state.is_active is False
        assert state.latitude is None

    def test_location_after_deactivation_needs_reactivation(self, service, make_seller, caller_for) -> None:
        seller = make_seller(is_active=True, latitude=40.0, longitude=-75.0, last_location_update=T0)
        caller = caller_for(seller)
        service.set_active(caller, seller.id, False)

        with pytest.raises(VendorInactiveError):
            service.set_location(caller, seller.id, 40.0, -75.0)

        service.set_active(caller, seller.id, True)
        state = service.set_location(caller, seller.id, 40.0, -75.0)
        assert state.is_fresh is True

    def test_other_sellers_record_is_denied(self, service, make_seller, caller_for) -> None:
        mine = make_seller()
        theirs = make_seller(business_name="Rival")
        with pytest.raises(PermissionDeniedError):
            service.set_active(caller_for(mine), theirs.id, True)


class TestUpdateLocation:

    def test_activate_with_location_in_one_call(self, service, make_seller, caller_for) -> None:
        seller = make_seller(is_active=False)

        state = service.update_location(caller_for(seller), seller.id, latitude=40.0, longitude=-75.0, is_active=True)

        assert state.is_active is True
        assert (state.latitude, state.longitude) == (40.0, -75.0)
        assert state.last_location_update == T0

    def test_deactivation_wins_over_location(self, service, make_seller, caller_for) -> None:
        seller = make_seller(is_active=True, latitude=40.0, longitude=-75.0, last_location_update=T0)

        state = service.update_location(caller_for(seller), seller.id, latitude=41.0, longitude=-74.0, is_active=False)

        assert state.is_active is False
        assert state.latitude is None
        assert state.last_location_update is None

    def test_location_only_requires_active(self, service, make_seller, caller_for) -> None:
        seller = make_seller(is_active=False)
        with pytest.raises(VendorInactiveError):
            service.update_location(caller_for(seller), seller.id, latitude=40.0, longitude=-75.0)

    def test_flag_only(self, service, make_seller, caller_for) -> None:
        seller = make_seller(is_active=False)
        state = service.update_location(caller_for(seller), seller.id, is_active=True)
        assert state.is_active is True

    def test_half_coordinate_pair_is_invalid(self, service, make_seller, caller_for) -> None:
        seller = make_seller(is_active=True)
        with pytest.raises(InvalidArgumentError):
            service.update_location(caller_for(seller), seller.id, latitude=40.0)

    def test_empty_update_is_invalid(self, service, make_seller, caller_for) -> None:
        seller = make_seller(is_active=True)
        with pytest.raises(InvalidArgumentError):
            service.update_location(caller_for(seller), seller.id)


class TestGetLocationState:

    def test_stale_location_is_reported_not_fresh(self, service, clock, make_seller, caller_for) -> None:
        seller = make_seller(is_active=True, latitude=40.0, longitude=-75.0, last_location_update=T0)
        clock.advance(minutes=15)

        state = service.get_location_state(caller_for(seller), seller.id)

        assert state.is_active is True
        assert state.latitude == 40.0
        assert state.is_fresh is False


class TestPersistenceFailure:

    def test_write_failure_is_internal_and_leaves_row_untouched(self, service, db, make_seller, caller_for,
                                                                 monkeypatch) -> None:
        seller = make_seller(is_active=True, latitude=40.0, longitude=-75.0, last_location_update=T0)

        def broken_update(*args, **kwargs):
            raise OperationalError("UPDATE sellers", {}, Exception("database is locked"))

        monkeypatch.setattr(SellerService, "update_seller", staticmethod(broken_update))

        with pytest.raises(InternalError):
            service.set_active(caller_for(seller), seller.id, False)

        stored = reload(db, seller.id)
        assert stored.is_active is True
        assert (stored.latitude, stored.longitude) == (40.0, -75.0)
