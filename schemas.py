"""
Database Schemas for the hotel booking backend

Each Pydantic model represents one MongoDB collection:
- Contact -> "contacts"
- Booking -> "bookings"
- User -> "users"
- Session -> "sessions"

Records are converted to documents with `to_document()` right before they
reach the store, and documents coming back keep their raw shape.
"""

from datetime import datetime
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

Role = Literal["admin", "manager"]
BookingStatus = Literal["pending", "confirmed", "checked-in", "completed", "cancelled"]


class Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class Contact(Record):
    """
    A visitor inquiry sent from the contact form or by staff
    """
    name: str = Field(..., min_length=2, max_length=100, description="Visitor name")
    email: str = Field(..., description="Lowercased email address")
    message: str = Field(..., min_length=1, description="Inquiry text")
    created_at: Optional[datetime] = None
    created_by: Optional[str] = Field(None, description="Username of the staff member, absent for public submissions")
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None


class Booking(Record):
    """
    A room reservation. Dates are stored as midnight datetimes and
    duration is always derived from them.
    """
    room_name: str = Field(..., alias="roomName")
    room_type: str = Field(..., alias="roomType")
    guest_name: str = Field(..., alias="guestName")
    guest_email: str = Field(..., alias="guestEmail")
    guest_phone: str = Field("", alias="guestPhone")
    check_in_date: datetime = Field(..., alias="checkInDate")
    check_out_date: datetime = Field(..., alias="checkOutDate")
    duration: int = Field(..., ge=1, description="Nights, derived from the dates")
    number_of_guests: int = Field(..., ge=1, le=10, alias="numberOfGuests")
    total_price: float = Field(..., ge=0, alias="totalPrice")
    special_requests: str = Field("", alias="specialRequests")
    status: Optional[BookingStatus] = None
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None


class User(Record):
    """
    Staff account allowed to log into the admin area
    """
    username: str
    password: str = Field(..., description="bcrypt hash, never the plaintext")
    role: Role = "manager"
    email: Optional[EmailStr] = None
    full_name: Optional[str] = Field(None, alias="fullName")
    created_at: Optional[datetime] = None


class Actor(Record):
    """
    Authenticated identity held in a session. Never carries the password hash.
    """
    id: str
    username: str
    role: Role
    email: Optional[str] = None
    full_name: Optional[str] = Field(None, alias="fullName")

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class Session(Record):
    """
    Server side login state, referenced by an opaque cookie token
    """
    token: str
    user: Actor
    created_at: datetime
    expires_at: datetime


class LoginRequest(BaseModel):
    username: str
    password: str
