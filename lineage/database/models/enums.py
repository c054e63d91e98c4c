"""
Enumeration Types
------------------

Enum classes and GEDCOM fact groups for the Lineage database models.

Enums:
    - Sex: Sex of an individual (M, F, U)

Fact groups:
    - BIRTH_EVENTS, DEATH_EVENTS, MARRIAGE_EVENTS, DIVORCE_EVENTS
    - MARRIAGE_END_EVENTS: facts that end a marriage before a spouse dies
    - NON_EVENTS: record-level facts never counted as events
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum
from typing import List


class Sex(str, Enum):
    """
    Enumeration of GEDCOM sex values.
    - MALE: M
    - FEMALE: F
    - UNKNOWN: U
    """

    MALE = "M"
    FEMALE = "F"
    UNKNOWN = "U"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available sex choices."""
        return [sex.value for sex in cls]

    @property
    def display_name(self) -> str:
        """Get human-readable display name."""
        display_map = {
            self.MALE: "Male",
            self.FEMALE: "Female",
            self.UNKNOWN: "Unknown",
        }
        return display_map.get(self, self.value)


# ---- GEDCOM event groups ----
BIRTH_EVENTS = ("BIRT", "CHR", "BAPM", "ADOP")
DEATH_EVENTS = ("DEAT", "BURI", "CREM")
MARRIAGE_EVENTS = ("MARR", "_NMR")
DIVORCE_EVENTS = ("DIV", "ANUL", "_SEPR")
MARRIAGE_END_EVENTS = ("DIV", "ANUL", "_SEPR", "_DETS")
NON_EVENTS = ("HEAD", "CHAN")

ALL_VITAL_EVENTS = BIRTH_EVENTS + MARRIAGE_EVENTS + DIVORCE_EVENTS + DEATH_EVENTS

EVENT_LABELS = {
    "BIRT": "birth",
    "CHR": "christening",
    "BAPM": "baptism",
    "ADOP": "adoption",
    "DEAT": "death",
    "BURI": "burial",
    "CREM": "cremation",
    "MARR": "marriage",
    "_NMR": "not married",
    "DIV": "divorce",
    "ANUL": "annulment",
    "_SEPR": "separated",
    "CENS": "census added",
}
