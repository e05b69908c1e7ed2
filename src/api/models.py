"""Pydantic models for API request/response."""

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from domain.model.user import Address, Geo, UserOrigin, UserRecord


class GeoModel(BaseModel):
    """Geographic coordinates, as strings."""
    lat: Optional[str] = None
    lng: Optional[str] = None


class AddressModel(BaseModel):
    """Postal address."""
    street: Optional[str] = None
    suite: Optional[str] = None
    city: Optional[str] = None
    zipcode: Optional[str] = None
    geo: Optional[GeoModel] = None


class UserRequest(BaseModel):
    """Request model for creating a user.

    Unknown fields, including `type`, are ignored.
    """
    id: Optional[str] = Field(None, description="User ID; generated when omitted")
    name: Optional[str] = None
    username: str = Field(..., min_length=1, description="Username")
    email: Optional[str] = None
    address: Optional[AddressModel] = None
    active: Optional[bool] = None

    @field_validator("id", mode="before")
    @classmethod
    def numeric_id_to_str(cls, v):
        """Numeric ids, as the upstream directory uses, are stored as strings."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    def to_domain(self) -> UserRecord:
        address = None
        if self.address:
            geo = self.address.geo
            address = Address(
                street=self.address.street,
                suite=self.address.suite,
                city=self.address.city,
                zipcode=self.address.zipcode,
                geo=Geo(lat=geo.lat, lng=geo.lng) if geo else None,
            )
        return UserRecord(
            id=self.id,
            name=self.name,
            username=self.username,
            email=self.email,
            address=address,
            active=self.active,
        )


class UserResponse(BaseModel):
    """Response model for a user tagged with its origin."""
    id: Optional[str] = Field(None, description="User ID, unique per origin")
    name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    address: Optional[AddressModel] = None
    type: Optional[UserOrigin] = Field(None, description="Source of the record: EXTERNAL or INTERNAL")
    active: Optional[bool] = None

    @classmethod
    def from_domain(cls, user: UserRecord) -> "UserResponse":
        address = None
        if user.address:
            a = user.address
            address = AddressModel(
                street=a.street,
                suite=a.suite,
                city=a.city,
                zipcode=a.zipcode,
                geo=GeoModel(lat=a.geo.lat, lng=a.geo.lng) if a.geo else None,
            )
        return cls(
            id=user.id,
            name=user.name,
            username=user.username,
            email=user.email,
            address=address,
            type=user.origin,
            active=user.active,
        )
