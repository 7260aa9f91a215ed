"""
Thermal Zone Models for Heat Pump Sizing
A zone is one room or area of the dwelling with its own geometry, isolation and setpoint
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from domain.core.isolation import DEFAULT_ISOLATION_CLASS, IsolationClass
from utils.validation import parse_number

# Form values may still be text while the user types
FormNumber = Union[float, int, str, None]

DEFAULT_AMBIENT_TEMP_C = 20.0


class ManualLossStatus(Enum):
    """State of the manual loss field"""
    UNSET = "unset"
    INVALID = "invalid"
    VALID = "valid"


@dataclass(frozen=True)
class ManualLoss:
    """
    Parsed manual loss entry.
    Only VALID entries carry a value; UNSET and INVALID both count as 0 W.
    """
    status: ManualLossStatus
    value: float = 0.0

    @classmethod
    def parse(cls, raw: FormNumber) -> "ManualLoss":
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            return cls(ManualLossStatus.UNSET)

        value = parse_number(raw)
        if value is None or value < 0:
            return cls(ManualLossStatus.INVALID)

        return cls(ManualLossStatus.VALID, value)

    @property
    def watts(self) -> float:
        return self.value if self.status is ManualLossStatus.VALID else 0.0


def _new_zone_id() -> str:
    return f"zone-{uuid.uuid4().hex[:8]}"


@dataclass
class Zone:
    """
    One heated room or area.

    calculated_loss is derived: it is written by update_zones_losses and
    should not be edited by hand.
    """
    zone_id: str = field(default_factory=_new_zone_id)
    name: str = ""

    surface: FormNumber = 0.0  # m²
    height: FormNumber = 0.0  # m
    isolation: Union[IsolationClass, str] = DEFAULT_ISOLATION_CLASS
    ambient_temp: FormNumber = DEFAULT_AMBIENT_TEMP_C  # °C

    # Manual override of the computed loss
    manual_override: bool = False
    manual_loss: FormNumber = ""

    calculated_loss: float = 0.0  # W

    @property
    def manual_entry(self) -> ManualLoss:
        return ManualLoss.parse(self.manual_loss)

    @property
    def loss_source(self) -> str:
        """Where calculated_loss comes from: "manual" or "formula" """
        return "manual" if self.manual_override else "formula"

    @property
    def isolation_label(self) -> str:
        if isinstance(self.isolation, IsolationClass):
            return self.isolation.value
        return str(self.isolation or "")

    def to_json(self) -> Dict[str, Any]:
        return {
            "zone_id": self.zone_id,
            "name": self.name,
            "surface": self.surface,
            "height": self.height,
            "isolation": self.isolation_label,
            "ambient_temp": self.ambient_temp,
            "manual_override": self.manual_override,
            "manual_loss": self.manual_loss,
            "calculated_loss": self.calculated_loss,
        }


@dataclass
class Project:
    """Ordered zones of the dwelling; order is display order only"""
    zones: List[Zone] = field(default_factory=list)

    @property
    def zone_count(self) -> int:
        return len(self.zones)

    def add_zone(self, zone: Optional[Zone] = None) -> Zone:
        zone = zone or Zone()
        if not zone.name:
            zone.name = f"Zone {len(self.zones) + 1}"
        self.zones.append(zone)
        return zone

    def remove_zone(self, zone_id: str) -> bool:
        for index, zone in enumerate(self.zones):
            if zone.zone_id == zone_id:
                del self.zones[index]
                return True
        return False

    def get_zone(self, zone_id: str) -> Optional[Zone]:
        for zone in self.zones:
            if zone.zone_id == zone_id:
                return zone
        return None

    def to_json(self) -> Dict[str, Any]:
        return {"zones": [zone.to_json() for zone in self.zones]}
