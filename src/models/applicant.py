"""Applicant models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

FREE_SCHEME = "FREE SCHEME"
COUNTER_DELIVERY = "Bus Pass Counter"


class _CamelModel(BaseModel):
    """Accept snake_case or the camelCase names the counter front end posts."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApplicantInput(_CamelModel):
    """Applicant form as submitted by an operator. Nothing here is validated."""

    name: Optional[str] = None
    father_name: Optional[str] = None
    dob: Optional[str] = None
    gender: Optional[str] = None
    age_years: Optional[str] = None
    age_months: Optional[str] = None
    age_days: Optional[str] = None
    aadhar: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    number: Optional[str] = None
    email: Optional[str] = None
    photo: Optional[str] = None
    aadhar_file: Optional[str] = None
    address: Optional[str] = None
    district: Optional[str] = None
    mandal: Optional[str] = None
    village: Optional[str] = None
    pincode: Optional[str] = None
    city: Optional[str] = None
    pass_type: Optional[str] = None
    counter: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def stringify(cls, value):
        """Form posts send numbers for age/pincode; keep everything as text."""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, str) and not value.strip():
            return None
        return value


class InlineFile(BaseModel):
    """One file posted inline as base64."""

    filename: Optional[str] = None
    content: str = ""


class InlineFiles(_CamelModel):
    photo: Optional[InlineFile] = None
    aadhar_file: Optional[InlineFile] = None


class AgeBreakdown(BaseModel):
    years: Optional[str] = None
    months: Optional[str] = None
    days: Optional[str] = None


class Attachments(_CamelModel):
    """Path strings of files stored outside the applicant record."""

    photo: str = ""
    aadhar_file: str = ""


class ApplicantRecord(_CamelModel):
    """Stored applicant. Immutable after issuance."""

    record_ref: str = Field(alias="id")
    pass_id: str
    qr_code: str
    name: Optional[str] = None
    father_name: Optional[str] = None
    dob: Optional[str] = None
    gender: Optional[str] = None
    age: AgeBreakdown = Field(default_factory=AgeBreakdown)
    aadhar: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    number: Optional[str] = None
    email: Optional[str] = None
    photo: str = ""
    aadhar_file: str = ""
    address: Optional[str] = None
    district: Optional[str] = None
    mandal: Optional[str] = None
    village: Optional[str] = None
    pincode: Optional[str] = None
    city: Optional[str] = None
    pass_type: Optional[str] = None
    payment_mode: str = FREE_SCHEME
    delivery_mode: str = COUNTER_DELIVERY
    counter: Optional[str] = None
    created_at: datetime


class PassIssueResult(_CamelModel):
    """What the counter prints right after issuance."""

    pass_id: str
    qr_code: str
    record_ref: str = Field(alias="id")
