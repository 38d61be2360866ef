"""Enumerations for execpay."""

from enum import StrEnum


class AgeCategory(StrEnum):
    UNDER_40 = "UNDER_40"
    FROM_40_TO_64 = "FROM_40_TO_64"
    OVER_65 = "OVER_65"

    @classmethod
    def from_age(cls, age: int) -> "AgeCategory":
        if age < 40:
            return cls.UNDER_40
        if age <= 64:
            return cls.FROM_40_TO_64
        return cls.OVER_65

    @property
    def pays_nursing_care(self) -> bool:
        """Nursing-care premiums apply from 40 through 64 inclusive."""
        return self is AgeCategory.FROM_40_TO_64

    @property
    def label(self) -> str:
        return {
            AgeCategory.UNDER_40: "Under 40",
            AgeCategory.FROM_40_TO_64: "40 to 64",
            AgeCategory.OVER_65: "65 and over",
        }[self]
