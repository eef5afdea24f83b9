from dataclasses import dataclass


@dataclass(frozen=True)
class Revision:
    """
    Value Object representing a revision identifier in a working copy.
    Compared by exact string equality, never by prefix.
    """
    value: str

    def __post_init__(self):
        if not self.value or not self.value.strip():
            raise ValueError("Revision cannot be empty")
        if self.value != self.value.strip():
            raise ValueError(f"Revision has surrounding whitespace: {self.value!r}")

    def __str__(self):
        return self.value
