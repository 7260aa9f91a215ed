"""
Pydantic schemas for saved wizard states
Validate a state file and convert it into the domain dataclasses
"""

from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from domain.core.isolation import DEFAULT_ISOLATION_CLASS
from domain.models.state import AppState, Beneficiary, Installer, TechnologySelection
from domain.models.zones import DEFAULT_AMBIENT_TEMP_C, Project, Zone
from utils.validation import normalize_postal_code

# Numbers typed in the form may be saved as text, cleared fields as null
FormValue = Optional[Union[float, str]]


class InstallerSchema(BaseModel):
    """Installer identification step"""
    company: str = Field("", description="Company name")
    address: str = Field("", description="Company address")
    siret: str = Field("", description="SIRET number")

    def to_domain(self) -> Installer:
        return Installer(company=self.company, address=self.address, siret=self.siret)


class BeneficiarySchema(BaseModel):
    """Beneficiary identification step"""
    first_name: str = ""
    last_name: str = ""
    address: str = ""
    postal_code: str = Field("", description="French postal code, 5 digits")
    city: str = ""
    construction_year: Union[int, str] = Field("", description="Year the dwelling was built")
    seaside: bool = Field(False, description="Dwelling on the seaside")
    altitude_band: Optional[str] = Field("0-200", description="Altitude range in meters, e.g. 1201-1400")

    @field_validator("postal_code", mode="before")
    @classmethod
    def clean_postal_code(cls, v):
        return normalize_postal_code(v)

    @field_validator("construction_year", mode="before")
    @classmethod
    def year_as_text(cls, v):
        return "" if v is None else str(v).strip()

    def to_domain(self) -> Beneficiary:
        # base_temperature is derived and never read back from a file
        return Beneficiary(
            first_name=self.first_name,
            last_name=self.last_name,
            address=self.address,
            postal_code=self.postal_code,
            city=self.city,
            construction_year=str(self.construction_year),
            seaside=self.seaside,
            altitude_band=self.altitude_band,
        )


class ZoneSchema(BaseModel):
    """One zone of the project step"""
    zone_id: Optional[str] = None
    name: str = ""
    surface: FormValue = Field(0.0, description="Floor surface in m²")
    height: FormValue = Field(0.0, description="Ceiling height in m")
    isolation: Optional[str] = Field(DEFAULT_ISOLATION_CLASS.value, description="Isolation class label")
    ambient_temp: FormValue = Field(DEFAULT_AMBIENT_TEMP_C, description="Target temperature in °C")
    manual_override: bool = False
    manual_loss: FormValue = Field("", description="Manual loss in W, used with manual_override")

    def to_domain(self) -> Zone:
        zone = Zone(
            name=self.name,
            surface=self.surface,
            height=self.height,
            isolation=self.isolation,
            ambient_temp=self.ambient_temp,
            manual_override=self.manual_override,
            manual_loss=self.manual_loss,
        )
        if self.zone_id:
            zone.zone_id = self.zone_id
        return zone


class ProjectSchema(BaseModel):
    zones: List[ZoneSchema] = Field(default_factory=list)

    def to_domain(self) -> Project:
        project = Project()
        for zone in self.zones:
            project.add_zone(zone.to_domain())
        return project


class TechnologySchema(BaseModel):
    """Heat pump technology step"""
    type: Optional[str] = None
    model: Optional[str] = None
    source_temperature: str = "0"
    units: int = Field(1, ge=1, description="Number of outdoor units")
    airflow: Optional[float] = None

    @field_validator("source_temperature", mode="before")
    @classmethod
    def source_temperature_as_text(cls, v):
        return "0" if v is None else str(v)

    def to_domain(self) -> TechnologySelection:
        return TechnologySelection(
            type=self.type,
            model=self.model,
            source_temperature=self.source_temperature,
            units=self.units,
            airflow=self.airflow,
        )


class WizardStateFile(BaseModel):
    """Saved wizard state"""
    step: int = Field(0, ge=0)
    installer: InstallerSchema = Field(default_factory=InstallerSchema)
    beneficiary: BeneficiarySchema = Field(default_factory=BeneficiarySchema)
    project: ProjectSchema = Field(default_factory=ProjectSchema)
    technology: TechnologySchema = Field(default_factory=TechnologySchema)

    def to_domain(self) -> AppState:
        return AppState(
            step=self.step,
            installer=self.installer.to_domain(),
            beneficiary=self.beneficiary.to_domain(),
            project=self.project.to_domain(),
            technology=self.technology.to_domain(),
        )
