from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class KeyValueRecord:
    """
    Value Object for a single record pushed to the dependent key-value service.
    """
    namespace: str
    key: str
    value: Any

    def __post_init__(self):
        if not self.namespace:
            raise ValueError("Record namespace cannot be empty")
        if not self.key:
            raise ValueError("Record key cannot be empty")

    def to_dict(self) -> dict[str, Any]:
        return {"namespace": self.namespace, "key": self.key, "value": self.value}
