"""
Base Temperature Resolver
Design outdoor temperature of the dwelling from its location
"""

import logging

from domain.core.climate_zones import (
    SEASIDE_BASE_TEMPERATURE,
    AltitudeBand,
    get_base_temperature,
    get_zone_for_postal_code,
)
from domain.models.state import Beneficiary

logger = logging.getLogger(__name__)


def compute_base_temperature(beneficiary: Beneficiary) -> float:
    """
    Resolve the base temperature (°C) of a beneficiary's dwelling.

    1. Postal code prefix -> climate zone (default zone when unknown)
    2. (climate zone, altitude band) -> tabulated temperature
    3. Seaside dwellings are forced to -2°C whatever the zone and altitude

    Never raises for form input. Pure: writing the result into
    beneficiary.base_temperature is left to the caller.
    """
    if beneficiary.seaside:
        return SEASIDE_BASE_TEMPERATURE

    zone = get_zone_for_postal_code(beneficiary.postal_code)
    band = AltitudeBand.from_label(beneficiary.altitude_band)
    temperature = get_base_temperature(zone, band)

    logger.debug(
        f"Base temperature for {beneficiary.postal_code!r}: zone {zone.value}, "
        f"band {band.value} -> {temperature}°C"
    )
    return temperature
