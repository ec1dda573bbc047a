"""Pydantic models for staff records entering and leaving persistence."""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Final, Literal, Mapping, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from staff_records.core.clock import Clock
from staff_records.core.dates import age_from_birth_date, retirement_date
from staff_records.core.enums import GENDER_NORMALIZATION_MAP, Sex
from staff_records.core.logging_utils import log_norm_error
from staff_records.nic.codec import clean_identity_text, extract_info, normalize, validate
from staff_records.nic.errors import INVALID_NIC_MESSAGE

Designation = Literal[
    "District Forest Officer",
    "Asst.District Forest Officer",
    "Management Service Officer",
    "Development Officer",
    "Range Forest officer",
    "Beat forest officer",
    "extension officer",
    "field forest assistant",
    "office employee service",
    "garden labour",
]
SalaryCode = Literal["S1", "S2", "S3", "D1", "D2", "D3", "A1", "A2"]
MaritalStatus = Literal["Single", "Married", "Divorced", "Widowed"]

DESIGNATIONS: Final[tuple[str, ...]] = get_args(Designation)
SALARY_CODES: Final[tuple[str, ...]] = get_args(SalaryCode)
MARITAL_STATUSES: Final[tuple[str, ...]] = get_args(MaritalStatus)

GENDER_ERROR: Final[str] = "Gender must be Male or Female."
APPOINTMENT_NUMBER_ERROR: Final[str] = "Appointment number may contain only A-Z, 0-9, '/' and '-'."
NAME_ERROR: Final[str] = "Full name is required."
EMAIL_ERROR: Final[str] = "Invalid email address."
PHONE_ERROR: Final[str] = "Invalid contact number."

_APPOINTMENT_NUMBER_PATTERN = re.compile(r"[A-Z0-9/\-]+")
_EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_PHONE_PATTERN = re.compile(r"[\d\s\-+()]+", re.ASCII)


def _blank_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def normalize_gender(value: object) -> Sex:
    """Normalize free-form gender text to :class:`Sex`."""

    if isinstance(value, Sex):
        return value
    if not isinstance(value, str):
        log_norm_error("gender", value, "unsupported type", "gender.type")
        raise ValueError(GENDER_ERROR)
    key = value.strip().lower()
    if key in GENDER_NORMALIZATION_MAP:
        return GENDER_NORMALIZATION_MAP[key]
    log_norm_error("gender", value, "unknown gender", "gender.unknown")
    raise ValueError(GENDER_ERROR)


class StaffRecordInput(BaseModel):
    """Staff record as submitted by the add/edit form."""

    appointment_number: str
    full_name: str
    gender: Sex
    date_of_birth: date
    nic_number: str
    marital_status: MaritalStatus = "Single"
    address_line1: str | None = None
    address_line2: str | None = None
    address_line3: str | None = None
    contact_number: str | None = None
    email: str | None = None
    designation: Designation = "field forest assistant"
    date_of_first_appointment: date
    increment_date: date | None = None
    salary_code: SalaryCode = "S1"
    basic_salary: float = Field(ge=0)
    increment_amount: float = Field(default=0, ge=0)
    image_data: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("appointment_number", mode="before")
    @classmethod
    def _validate_appointment_number(cls, value: object) -> str:
        text = str(value).strip().upper() if value is not None else ""
        if not _APPOINTMENT_NUMBER_PATTERN.fullmatch(text):
            log_norm_error("appointment_number", value, "pattern mismatch", "appointment_number.invalid")
            raise ValueError(APPOINTMENT_NUMBER_ERROR)
        return text

    @field_validator("full_name", mode="before")
    @classmethod
    def _validate_full_name(cls, value: object) -> str:
        collapsed = " ".join(str(value).split()) if value is not None else ""
        if not collapsed:
            raise ValueError(NAME_ERROR)
        return collapsed

    @field_validator("gender", mode="before")
    @classmethod
    def _validate_gender(cls, value: object) -> Sex:
        return normalize_gender(value)

    @field_validator("nic_number", mode="before")
    @classmethod
    def _validate_nic_number(cls, value: object) -> str:
        if not validate(value).is_valid:
            log_norm_error("nic_number", value, "not a legacy or modern identity number", "nic_number.invalid")
            raise ValueError(INVALID_NIC_MESSAGE)
        return clean_identity_text(value) or ""

    @field_validator(
        "address_line1",
        "address_line2",
        "address_line3",
        "contact_number",
        "email",
        "increment_date",
        "image_data",
        mode="before",
    )
    @classmethod
    def _blank_optional(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("contact_number")
    @classmethod
    def _validate_contact_number(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not _PHONE_PATTERN.fullmatch(text):
            raise ValueError(PHONE_ERROR)
        return text

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not _EMAIL_PATTERN.fullmatch(text):
            raise ValueError(EMAIL_ERROR)
        return text

    @model_validator(mode="after")
    def _audit_nic_sex(self) -> "StaffRecordInput":
        info = extract_info(self.nic_number)
        if info.sex is not None and info.sex is not self.gender:
            log_norm_error(
                "nic_number",
                self.nic_number,
                f"identity number encodes {info.sex.value}, form says {self.gender.value}",
                "nic_number.sex_mismatch",
            )
        return self


class StaffRecord(StaffRecordInput):
    """Persisted shape: canonical NIC pair plus values derived from the birth date."""

    nic_number_old: str | None = None
    age: int
    date_of_retirement: date


def to_staff_record(payload: Mapping[str, Any], *, clock: Clock | None = None) -> StaffRecord:
    """Validate *payload* and derive the fields stored alongside it.

    Raises:
        pydantic.ValidationError: any field fails validation.
    """

    submitted = StaffRecordInput.model_validate(dict(payload))
    identity = normalize(submitted.nic_number)
    data = submitted.model_dump()
    data.update(
        nic_number=identity.modern_form,
        nic_number_old=identity.legacy_form,
        age=age_from_birth_date(submitted.date_of_birth, clock=clock),
        date_of_retirement=retirement_date(submitted.date_of_birth),
    )
    return StaffRecord.model_construct(**data)


__all__ = [
    "DESIGNATIONS",
    "Designation",
    "MARITAL_STATUSES",
    "MaritalStatus",
    "SALARY_CODES",
    "SalaryCode",
    "StaffRecord",
    "StaffRecordInput",
    "normalize_gender",
    "to_staff_record",
]
