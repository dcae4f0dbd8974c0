from db.models import Seller
from db.schemas import SellerProfile


class ProfileService:
    """Read-only view over the business profile stored with a seller."""

    @staticmethod
    def get_profile(seller: Seller) -> SellerProfile:
        return SellerProfile(
            business_name=seller.business_name,
            owner_name=seller.owner_name,
            phone=seller.phone,
            description=seller.description,
            offerings=[offering.name for offering in seller.offerings],
        )
