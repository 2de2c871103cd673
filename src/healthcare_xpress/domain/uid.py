"""Person identifiers and the allocator that mints them."""

from dataclasses import dataclass

WILDCARD_UID = 99999


@dataclass(frozen=True, order=True)
class Uid:
    """
    Positive integer identifying one person record.
    Equality and hashing are strict; use matches() for identity checks that honour the wildcard.
    """

    MESSAGE_CONSTRAINTS = "Ids should only contain numeric characters, and it should not be blank"
    WILDCARD = WILDCARD_UID

    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int) or self.value < 1:
            raise ValueError(Uid.MESSAGE_CONSTRAINTS)

    @staticmethod
    def is_valid(text: str) -> bool:
        text = (text or "").strip()
        return text.isascii() and text.isdigit() and int(text) > 0

    @classmethod
    def parse(cls, text: str) -> "Uid":
        if not cls.is_valid(text):
            raise ValueError(cls.MESSAGE_CONSTRAINTS)
        return cls(int(text.strip()))

    @property
    def is_wildcard(self) -> bool:
        return self.value == WILDCARD_UID

    def matches(self, other: "Uid | None") -> bool:
        """True for equal values, or when either side is the wildcard uid."""
        if other is None:
            return False
        if self.is_wildcard or other.is_wildcard:
            return True
        return self.value == other.value

    def __str__(self) -> str:
        return str(self.value)


class UidAllocator:
    """Monotonic uid counter. Pass one instance to everything that creates records."""

    def __init__(self, start: int = 1) -> None:
        if start < 1:
            raise ValueError("UidAllocator start must be positive.")
        self._advance_to(start)

    def _advance_to(self, value: int) -> None:
        # The wildcard is reserved and never handed out.
        self._next = value + 1 if value == WILDCARD_UID else value

    @property
    def next_value(self) -> int:
        return self._next

    def issue(self, value: int | None = None) -> Uid:
        """Return Uid(value) and move the counter past it, or draw the next free value."""
        if value is None:
            uid = Uid(self._next)
            self._advance_to(self._next + 1)
            return uid
        uid = Uid(value)
        self.observe(uid)
        return uid

    def observe(self, uid: Uid) -> None:
        """Advance the counter past an identifier minted elsewhere (e.g. loaded from file)."""
        if uid.value >= self._next:
            self._advance_to(uid.value + 1)
