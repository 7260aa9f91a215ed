"""
Zone-Based Loss Calculator
Heat loss of each zone at the base temperature, and the total heating load of the project
"""

import logging
from dataclasses import dataclass
from typing import List

from domain.core.isolation import DEFAULT_ISOLATION_CLASS, isolation_coefficient
from domain.models.zones import DEFAULT_AMBIENT_TEMP_C, FormNumber, Project, Zone
from utils.validation import safe_float

logger = logging.getLogger(__name__)


@dataclass
class ZoneLossResult:
    """Loss of one zone, as reported to the sizing summary"""
    zone_id: str
    zone_name: str
    loss_w: float
    source: str  # "manual" or "formula"
    surface_m2: float
    volume_m3: float

    # Load intensity
    loss_w_per_m2: float = 0

    def __post_init__(self):
        if self.surface_m2 > 0:
            self.loss_w_per_m2 = self.loss_w / self.surface_m2


def compute_formula_loss(zone: Zone, base_temperature: FormNumber) -> float:
    """
    Formula loss of a zone in watts:

        loss = surface * height * coefficient(isolation) * (ambient - base)

    Blank or unparsable numbers count as 0. Geometry is not clamped, so
    non-positive surfaces give zero or negative losses.
    """
    surface = safe_float(zone.surface)
    height = safe_float(zone.height)
    ambient = safe_float(zone.ambient_temp)
    delta_t = ambient - safe_float(base_temperature)

    return surface * height * isolation_coefficient(zone.isolation) * delta_t


def compute_zone_loss(zone: Zone, base_temperature: FormNumber) -> float:
    """
    Heat loss of a zone in watts.

    With manual_override set the manual value wins; a blank or invalid manual
    value gives 0 W rather than falling back to the formula.
    """
    if zone.manual_override:
        return zone.manual_entry.watts
    return compute_formula_loss(zone, base_temperature)


def update_zones_losses(project: Project, base_temperature: FormNumber) -> None:
    """Recompute calculated_loss of every zone against the given base temperature"""
    for zone in project.zones:
        zone.calculated_loss = compute_zone_loss(zone, base_temperature)
        logger.debug(f"Zone {zone.name or zone.zone_id}: {zone.calculated_loss:.1f} W ({zone.loss_source})")


def get_total_losses_w(project: Project) -> float:
    """
    Total heating load of the project in watts.

    Sums the stored calculated_loss values; it does not recompute them, so
    update_zones_losses must run first for the current base temperature.
    """
    return sum(zone.calculated_loss for zone in project.zones)


def ensure_zones_initialized(project: Project) -> None:
    """Make sure the project has at least one zone to edit"""
    if project.zones:
        return

    project.add_zone(Zone(
        surface=0.0,
        height=0.0,
        isolation=DEFAULT_ISOLATION_CLASS,
        ambient_temp=DEFAULT_AMBIENT_TEMP_C,
        manual_override=False,
        manual_loss="",
        calculated_loss=0.0,
    ))
    logger.info("Created default zone for empty project")


def get_zone_results(project: Project) -> List[ZoneLossResult]:
    """Per-zone breakdown of the stored losses, in display order"""
    results = []
    for zone in project.zones:
        surface = safe_float(zone.surface)
        results.append(ZoneLossResult(
            zone_id=zone.zone_id,
            zone_name=zone.name,
            loss_w=zone.calculated_loss,
            source=zone.loss_source,
            surface_m2=surface,
            volume_m3=surface * safe_float(zone.height),
        ))
    return results
