"""Typed update commands for customers.

Each command changes one aspect of a customer. A PATCH request carries a
list of them, applied in order.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from salonbook.schemas.customer import ReminderInterval


class _Command(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class RenameCustomer(_Command):
    kind: Literal["rename"] = "rename"
    full_name: str = Field(..., min_length=1, max_length=255)

    @field_validator("full_name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("full_name must not be blank")
        return value


class ChangeMobileNumber(_Command):
    kind: Literal["change_mobile_number"] = "change_mobile_number"
    mobile_number: str = Field(..., min_length=1, max_length=50)


class SetInterest(_Command):
    kind: Literal["set_interest"] = "set_interest"
    interest: list[str]

    @field_validator("interest")
    @classmethod
    def collapse_duplicates(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))


class SetPreferences(_Command):
    kind: Literal["set_preferences"] = "set_preferences"
    preferences: str


class RescheduleVisit(_Command):
    kind: Literal["reschedule_visit"] = "reschedule_visit"
    visiting_date: str


class SetReminderInterval(_Command):
    kind: Literal["set_reminder_interval"] = "set_reminder_interval"
    reminder_interval: ReminderInterval


class RecordReminderSent(_Command):
    """Log a dispatched reminder. ``sent_at`` defaults to the time of application."""

    kind: Literal["record_reminder_sent"] = "record_reminder_sent"
    message: str = "WhatsApp reminder sent"
    sent_at: str | None = None


CustomerCommand = Annotated[
    Union[
        RenameCustomer,
        ChangeMobileNumber,
        SetInterest,
        SetPreferences,
        RescheduleVisit,
        SetReminderInterval,
        RecordReminderSent,
    ],
    Field(discriminator="kind"),
]


class CustomerUpdate(BaseModel):
    """Schema for updating a customer - one or more commands."""

    commands: list[CustomerCommand] = Field(..., min_length=1)
