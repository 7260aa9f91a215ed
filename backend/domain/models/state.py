"""
Wizard state models
The aggregate the sizing form reads and writes; the engine annotates its derived fields
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from domain.core.climate_zones import AltitudeBand, LOWEST_ALTITUDE_BAND
from domain.models.zones import Project


@dataclass
class Installer:
    """Company installing the heat pump"""
    company: str = ""
    address: str = ""
    siret: str = ""

    def to_json(self) -> Dict[str, Any]:
        return {"company": self.company, "address": self.address, "siret": self.siret}


@dataclass
class Beneficiary:
    """
    Household receiving the heat pump.

    base_temperature is derived from postal_code, altitude_band and seaside.
    It stays None until the first refresh of the wizard.
    """
    first_name: str = ""
    last_name: str = ""
    address: str = ""
    postal_code: str = ""
    city: str = ""
    construction_year: str = ""
    seaside: bool = False
    altitude_band: Union[AltitudeBand, str] = LOWEST_ALTITUDE_BAND
    base_temperature: Optional[float] = None

    @property
    def name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def to_json(self) -> Dict[str, Any]:
        band = self.altitude_band
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "address": self.address,
            "postal_code": self.postal_code,
            "city": self.city,
            "construction_year": self.construction_year,
            "seaside": self.seaside,
            "altitude_band": band.value if isinstance(band, AltitudeBand) else band,
            "base_temperature": self.base_temperature,
        }


@dataclass
class TechnologySelection:
    """Heat pump chosen on the last step; read by the equipment sizing step only"""
    type: Optional[str] = None
    model: Optional[str] = None
    source_temperature: str = "0"
    units: int = 1
    airflow: Optional[float] = None

    def to_json(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "model": self.model,
            "source_temperature": self.source_temperature,
            "units": self.units,
            "airflow": self.airflow,
        }


@dataclass
class AppState:
    """Complete wizard state, created once per session and mutated in place"""
    step: int = 0
    installer: Installer = field(default_factory=Installer)
    beneficiary: Beneficiary = field(default_factory=Beneficiary)
    project: Project = field(default_factory=Project)
    technology: TechnologySelection = field(default_factory=TechnologySelection)

    def to_json(self) -> Dict[str, Any]:
        return {
            "step": self.step,
            "installer": self.installer.to_json(),
            "beneficiary": self.beneficiary.to_json(),
            "project": self.project.to_json(),
            "technology": self.technology.to_json(),
        }
