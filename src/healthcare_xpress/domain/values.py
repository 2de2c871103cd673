"""Value objects for person attributes. Each validates its own text on construction."""

import re
from dataclasses import dataclass

import phonenumbers

_NAME_RE = re.compile(r"[^\W_](?:[^\W_]| )*")
_PHONE_DIGITS_RE = re.compile(r"\d{3,}")
_EMAIL_RE = re.compile(
    r"[a-zA-Z0-9]+(?:[+_.\-][a-zA-Z0-9]+)*"
    r"@"
    r"(?:[a-zA-Z0-9]+(?:-[a-zA-Z0-9]+)*\.)*"
    r"[a-zA-Z0-9]{2,}(?:-[a-zA-Z0-9]+)*"
)
_TAG_RE = re.compile(r"[a-zA-Z0-9]+")

_TRUE_WORDS = ("true", "visited")
_FALSE_WORDS = ("false", "not visited")


@dataclass(frozen=True)
class Name:
    MESSAGE_CONSTRAINTS = (
        "Names should only contain alphanumeric characters and spaces, and it should not be blank"
    )

    value: str

    def __post_init__(self):
        if not Name.is_valid(self.value):
            raise ValueError(Name.MESSAGE_CONSTRAINTS)

    @staticmethod
    def is_valid(text: str) -> bool:
        return isinstance(text, str) and _NAME_RE.fullmatch(text) is not None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Phone:
    """Phone number as entered. Local digit strings and international (+CC) numbers are accepted."""

    MESSAGE_CONSTRAINTS = (
        "Phone numbers should only contain numbers, and it should be at least 3 digits long, "
        "or be a valid international number starting with +"
    )

    value: str

    def __post_init__(self):
        if not Phone.is_valid(self.value):
            raise ValueError(Phone.MESSAGE_CONSTRAINTS)

    @staticmethod
    def is_valid(text: str) -> bool:
        if not isinstance(text, str):
            return False
        if _PHONE_DIGITS_RE.fullmatch(text):
            return True
        if not text.startswith("+"):
            return False
        try:
            parsed = phonenumbers.parse(text, None)
        except phonenumbers.NumberParseException:
            return False
        return phonenumbers.is_valid_number(parsed)

    def normalized(self, default_region: str | None = None) -> str:
        """E.164 form when the number parses for the region, else the raw digits."""
        try:
            parsed = phonenumbers.parse(self.value, default_region)
        except phonenumbers.NumberParseException:
            return self.value
        if not phonenumbers.is_valid_number(parsed):
            return self.value
        return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Email:
    MESSAGE_CONSTRAINTS = (
        "Emails should be of the format local-part@domain and adhere to the following constraints:\n"
        "1. The local-part should only contain alphanumeric characters and these special characters "
        "+_.-, and may not start or end with a special character.\n"
        "2. The domain name is made up of domain labels separated by periods. Each label starts and "
        "ends with alphanumeric characters, may be joined by hyphens, and the last label is at "
        "least 2 characters long."
    )

    value: str

    def __post_init__(self):
        if not Email.is_valid(self.value):
            raise ValueError(Email.MESSAGE_CONSTRAINTS)

    @staticmethod
    def is_valid(text: str) -> bool:
        return isinstance(text, str) and _EMAIL_RE.fullmatch(text) is not None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Address:
    MESSAGE_CONSTRAINTS = "Addresses can take any values, and it should not be blank"

    value: str

    def __post_init__(self):
        if not Address.is_valid(self.value):
            raise ValueError(Address.MESSAGE_CONSTRAINTS)

    @staticmethod
    def is_valid(text: str) -> bool:
        return isinstance(text, str) and bool(text) and not text[0].isspace()

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Gender:
    MALE_SYMBOL = "M"
    FEMALE_SYMBOL = "F"
    MESSAGE_CONSTRAINTS = "Gender should be either M or F (case-insensitive)"

    value: str

    def __post_init__(self):
        if not Gender.is_valid(self.value):
            raise ValueError(Gender.MESSAGE_CONSTRAINTS)
        object.__setattr__(self, "value", self.value.strip().upper())

    @staticmethod
    def is_valid(text: str) -> bool:
        return isinstance(text, str) and text.strip().upper() in (
            Gender.MALE_SYMBOL,
            Gender.FEMALE_SYMBOL,
        )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Category:
    PATIENT_SYMBOL = "P"
    NURSE_SYMBOL = "N"
    MESSAGE_CONSTRAINTS = "Category should be either P (patient) or N (nurse), case-insensitive"

    value: str

    def __post_init__(self):
        if not Category.is_valid(self.value):
            raise ValueError(Category.MESSAGE_CONSTRAINTS)
        object.__setattr__(self, "value", self.value.strip().upper())

    @staticmethod
    def is_valid(text: str) -> bool:
        return isinstance(text, str) and text.strip().upper() in (
            Category.PATIENT_SYMBOL,
            Category.NURSE_SYMBOL,
        )

    @property
    def is_patient(self) -> bool:
        return self.value == Category.PATIENT_SYMBOL

    @property
    def is_nurse(self) -> bool:
        return self.value == Category.NURSE_SYMBOL

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Tag:
    MESSAGE_CONSTRAINTS = "Tags names should be alphanumeric"

    name: str

    def __post_init__(self):
        if not Tag.is_valid(self.name):
            raise ValueError(Tag.MESSAGE_CONSTRAINTS)

    @staticmethod
    def is_valid(text: str) -> bool:
        return isinstance(text, str) and _TAG_RE.fullmatch(text) is not None

    def __str__(self) -> str:
        return f"[{self.name}]"


@dataclass(frozen=True)
class VisitStatus:
    """Whether a patient's home visits have been carried out."""

    MESSAGE_CONSTRAINTS = "Visit status should be one of: true, false, visited, not visited"

    visited: bool = False

    @staticmethod
    def is_valid(text: str) -> bool:
        if not isinstance(text, str):
            return False
        return text.strip().lower() in _TRUE_WORDS + _FALSE_WORDS

    @classmethod
    def from_text(cls, text: str) -> "VisitStatus":
        if not cls.is_valid(text):
            raise ValueError(cls.MESSAGE_CONSTRAINTS)
        return cls(visited=text.strip().lower() in _TRUE_WORDS)

    def __str__(self) -> str:
        return "visited" if self.visited else "not visited"
