from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class BankEntry:
    code: str
    name: str
    short_name: str
    color: str


class TargetType(Enum):
    # value doubles as the sub-tag inside the tag 29 container
    MOBILE = "01"
    NATIONAL_ID = "02"
    EWALLET = "03"


@dataclass(frozen=True)
class TargetClassification:
    type: TargetType
    canonical_id: str

    @property
    def type_code(self) -> str:
        return self.type.value


@dataclass(frozen=True)
class QrOptions:
    """Rendering options handed to the QR image library."""
    width: int = 280
    margin: int = 2
    dark_color: str = "#1a1a1a"
    light_color: str = "#ffffff"
    error_correction: str = "M"
