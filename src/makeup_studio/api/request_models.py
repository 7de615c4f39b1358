"""Pydantic request bodies for the HTTP API."""

from pydantic import BaseModel

from makeup_studio.domain.bookings import BookingStatus


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    email: str
    password: str
    secret: str


class OAuthRegistrationRequest(BaseModel):
    secret: str


class ProfileTextUpdate(BaseModel):
    value: str


class LeaveRequest(BaseModel):
    """Dashboard values at the moment the admin tries to leave."""

    bio: str = ""
    bio_2: str = ""
    about_image_1: str = ""
    about_image_2: str = ""
    pending_file_1: bool = False
    pending_file_2: bool = False
    confirm: bool = False


class ServicePayload(BaseModel):
    title: str
    description: str
    price: str | int | float
    duration: str | int
    category: str
    image_url: str | None = None
    featured: bool = False


class FAQPayload(BaseModel):
    question: str
    answer: str
    category: str
    display_order: str | int | None = None


class BookingPayload(BaseModel):
    client_name: str
    client_email: str
    client_phone: str
    service_id: str
    booking_date: str
    start_time: str
    notes: str = ""


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class ContactPayload(BaseModel):
    name: str
    email: str
    message: str
    phone: str = ""
    subject: str = ""
