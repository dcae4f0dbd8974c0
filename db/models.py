from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Enum, Float, Text, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from utils import Base
from utils.enums import UserType


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    user_type = Column(Enum(UserType), default=UserType.SEARCHER, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    seller = relationship("Seller", uselist=False, back_populates="user")

    def __repr__(self):
        return f"User -> {self.id} email: {self.email} type: {self.user_type}"


class Seller(Base):
    __tablename__ = "sellers"
    __table_args__ = (
        CheckConstraint("(latitude IS NULL) = (longitude IS NULL)", name="ck_sellers_coordinate_pair"),
        CheckConstraint("(latitude IS NULL) = (last_location_update IS NULL)", name="ck_sellers_location_timestamp"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False, index=True)
    business_name = Column(String(255), nullable=False)
    owner_name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)

    # location state, written only through LocationService
    is_active = Column(Boolean, default=False, nullable=False, index=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    last_location_update = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="seller")
    offerings = relationship("Offering", back_populates="seller", cascade="all, delete-orphan",
                             order_by="Offering.id")

    def __repr__(self):
        return f"Seller -> id:{self.id} name: {self.business_name} is active: {self.is_active}"


class Offering(Base):
    __tablename__ = "offerings"

    id = Column(Integer, primary_key=True, index=True)
    seller_id = Column(Integer, ForeignKey("sellers.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)

    seller = relationship("Seller", back_populates="offerings")
