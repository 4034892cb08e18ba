"""Inspectable zone metadata shown when a user clicks a map feature."""

from __future__ import annotations

from dataclasses import dataclass

UNNAMED_ZONE = "Unnamed Zone"
UNKNOWN_TYPE = "Unknown type"


@dataclass(frozen=True, slots=True)
class ZoneInfo:
    """Display fields of a clicked zone.

    Optional fields are empty strings when the feature does not carry them.
    ``status`` is ``"legal"`` or ``"exclusion"`` where the source says so.
    """

    name: str = UNNAMED_ZONE
    type: str = UNKNOWN_TYPE
    status: str = ""
    description: str = ""
    restrictions: str = ""
    contact: str = ""

    @property
    def is_exclusion(self) -> bool:
        """Whether the source marks this zone as an exclusion zone."""
        return self.status == "exclusion"

    def popup_text(self) -> str:
        """Two-line summary used for a map popup."""
        return f"{self.name}\n{self.type}"
