"""
Domain model for the ODS instance targeted by a request.
"""
import re
from typing import Optional

_NUMERIC_SUFFIX = re.compile(r"(\d+)$")


class InstanceContext:
    """Identifies an ODS instance. Populated once per request."""

    def __init__(self, id: int, name: str):
        self.id = id
        self.name = name

    def numeric_suffix(self) -> Optional[int]:
        """Trailing number of the instance name (Ed_Fi_Ods_2024 -> 2024)."""
        match = _NUMERIC_SUFFIX.search(self.name or "")
        return int(match.group(1)) if match else None

    def __eq__(self, other):
        if not isinstance(other, InstanceContext):
            return NotImplemented
        return self.id == other.id and self.name == other.name

    def __repr__(self):
        return f"InstanceContext(id={self.id}, name={self.name})"
