"""Candidate metadata record.

A `Candidate` is attached to a prediction method at definition time and read
back once per invocation. Only presence is validated: names must be non-empty
and the enum fields must hold a known member.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Party(str, Enum):
    REPUBLICAN = "Republican"
    DEMOCRAT = "Democrat"
    GREEN = "Green"
    LIBERTARIAN = "Libertarian"

    def __str__(self) -> str:
        return self.value


class Sex(str, Enum):
    """Biological sex marker (XY / XX)."""

    MALE = "Male"
    FEMALE = "Female"

    def __str__(self) -> str:
        return self.value


def _coerce_enum(enum_cls: type[Enum], value: object, *, field_name: str) -> Enum:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValueError(f"{field_name} must be one of: {allowed} (got {value!r})") from None


@dataclass(frozen=True, slots=True)
class Candidate:
    party: Party
    first_name: str
    last_name: str
    sex: Sex = Sex.FEMALE

    def __post_init__(self) -> None:
        for field_name in ("first_name", "last_name"):
            value = getattr(self, field_name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{field_name} must be a non-empty string")

        # frozen: bypass __setattr__ to store the coerced members.
        object.__setattr__(self, "party", _coerce_enum(Party, self.party, field_name="party"))
        object.__setattr__(self, "sex", _coerce_enum(Sex, self.sex, field_name="sex"))

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def describe(self, method_name: str, office: str) -> str:
        """Format the prediction line for `method_name` running for `office`."""

        return (
            f"{method_name}: The {office} is {self.display_name} "
            f"({self.sex.value}) of the {self.party.value} party!"
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "party": self.party.value,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "sex": self.sex.value,
        }
