"""In-memory filtering of staff records for the search screen."""

from __future__ import annotations

from typing import Iterable, List

from pydantic import BaseModel, ConfigDict, field_validator

from staff_records.core.enums import Sex

from .models import StaffRecord, normalize_gender


class StaffSearchParams(BaseModel):
    """Optional filters; blank strings count as "not set"."""

    search_term: str | None = None
    designation: str | None = None
    gender: Sex | None = None
    age_min: int | None = None
    age_max: int | None = None
    nic_number: str | None = None
    salary_code: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("gender", mode="before")
    @classmethod
    def _validate_gender(cls, value: object) -> Sex | None:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return normalize_gender(value)


def _contains(needle: str, *haystacks: str | None) -> bool:
    return any(hay is not None and needle in hay.lower() for hay in haystacks)


def filter_staff(records: Iterable[StaffRecord], params: StaffSearchParams) -> List[StaffRecord]:
    """Return the records matching every filter set in *params*, in input order."""

    filtered = list(records)

    if params.search_term is not None:
        term = params.search_term.lower()
        filtered = [
            staff
            for staff in filtered
            if _contains(term, staff.full_name, staff.appointment_number, staff.nic_number, staff.nic_number_old)
        ]

    if params.designation is not None:
        filtered = [staff for staff in filtered if staff.designation == params.designation]

    if params.gender is not None:
        filtered = [staff for staff in filtered if staff.gender is params.gender]

    if params.age_min is not None:
        filtered = [staff for staff in filtered if staff.age >= params.age_min]

    if params.age_max is not None:
        filtered = [staff for staff in filtered if staff.age <= params.age_max]

    if params.nic_number is not None:
        nic = params.nic_number.lower()
        filtered = [staff for staff in filtered if _contains(nic, staff.nic_number, staff.nic_number_old)]

    if params.salary_code is not None:
        filtered = [staff for staff in filtered if staff.salary_code == params.salary_code]

    return filtered


__all__ = ["StaffSearchParams", "filter_staff"]
