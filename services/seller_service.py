from typing import Optional, List

from sqlalchemy.orm import Session, selectinload

from db.models import Seller


class SellerService:

    @staticmethod
    def get_seller_by_id(db: Session, seller_id: int) -> Optional[Seller]:
        return db.query(Seller).filter(Seller.id == seller_id).first()

    @staticmethod
    def get_seller_by_user_id(db: Session, user_id: int) -> Optional[Seller]:
        return db.query(Seller).filter(Seller.user_id == user_id).first()

    @staticmethod
    def fetch_active_sellers(db: Session) -> List[Seller]:
        return db.query(Seller).options(
            selectinload(Seller.offerings)
        ).filter(
            Seller.is_active == True
        ).order_by(Seller.id).all()

    @staticmethod
    def update_seller(db: Session, seller_id: int, values: dict, require_active: bool = False) -> int:
        """
            Apply `values` to one seller row as a single UPDATE statement and commit.
            :param require_active: only update the row while it is still active
            :return: number of rows updated (0 or 1)
        """
        query = db.query(Seller).filter(Seller.id == seller_id)
        if require_active:
            query = query.filter(Seller.is_active == True)
        updated = query.update(values, synchronize_session=False)
        db.commit()
        return updated
