"""
French Base Temperature Zone Configuration
Provides the lookup tables used to resolve the design outdoor temperature
("température extérieure de base") of a dwelling

Based on the usual heat-pump sizing references:
- NF EN 12831 national annex (base temperature map of metropolitan France)
- Altitude corrections by 200 m band, tabulated per zone

This module consolidates:
- Climate zone identifiers (A = mildest ... I = coldest)
- Postal code prefix to climate zone mapping
- Altitude bands
- (climate zone, altitude band) to base temperature table (CSV data file)
"""

import csv
import logging
import os
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, Optional, Tuple

from core.environment import get_env_path
from services.error_types import ConfigurationError

logger = logging.getLogger(__name__)


class ClimateZone(str, Enum):
    """Base temperature zones of metropolitan France"""
    A = "A"  # -2°C at sea level (Corsica, Riviera)
    B = "B"  # -4°C (Mediterranean coast)
    C = "C"  # -5°C (Atlantic coast, South-West)
    D = "D"  # -7°C (Paris basin, West, Centre)
    E = "E"  # -8°C (Centre-East, Limousin)
    F = "F"  # -9°C (North)
    G = "G"  # -10°C (Rhône-Alpes, Massif Central, Burgundy)
    H = "H"  # -12°C (North-East, Southern Alps)
    I = "I"  # -15°C (high Alpine valleys)


# Unmapped or malformed postal codes land here
DEFAULT_CLIMATE_ZONE = ClimateZone.D

# Seaside dwellings are sized against a fixed base temperature
SEASIDE_BASE_TEMPERATURE = -2.0


class AltitudeBand(str, Enum):
    """Altitude ranges in meters, as offered by the beneficiary form"""
    BAND_0_200 = "0-200"
    BAND_201_400 = "201-400"
    BAND_401_600 = "401-600"
    BAND_601_800 = "601-800"
    BAND_801_1000 = "801-1000"
    BAND_1001_1200 = "1001-1200"
    BAND_1201_1400 = "1201-1400"
    BAND_1401_1600 = "1401-1600"
    BAND_1601_1800 = "1601-1800"
    BAND_1801_2000 = "1801-2000"

    @property
    def upper_bound_m(self) -> int:
        return int(self.value.split("-")[1])

    @classmethod
    def from_label(cls, label: Any) -> "AltitudeBand":
        """
        Resolve a band from its form label.
        Absent or unknown labels resolve to the lowest band.
        """
        if isinstance(label, cls):
            return label
        try:
            return cls("" if label is None else str(label).strip())
        except ValueError:
            if label:
                logger.debug(f"Unknown altitude band {label!r}, using {LOWEST_ALTITUDE_BAND.value}")
            return LOWEST_ALTITUDE_BAND


LOWEST_ALTITUDE_BAND = AltitudeBand.BAND_0_200


def altitude_band_for(altitude_m: float) -> AltitudeBand:
    """
    Get the altitude band containing an altitude in meters.
    Negative altitudes map to the lowest band, anything above 2000 m to the highest.
    """
    for band in AltitudeBand:
        if altitude_m <= band.upper_bound_m:
            return band
    return AltitudeBand.BAND_1801_2000


# Department prefix (first two digits of the postal code) to climate zone
DEPARTMENT_CLIMATE_ZONES: Dict[str, ClimateZone] = {
    # Zone A - Corsica, Riviera
    "06": ClimateZone.A, "2A": ClimateZone.A, "2B": ClimateZone.A,

    # Zone B - Mediterranean coast
    "11": ClimateZone.B, "13": ClimateZone.B, "30": ClimateZone.B, "34": ClimateZone.B,
    "66": ClimateZone.B, "83": ClimateZone.B, "84": ClimateZone.B,

    # Zone C - Atlantic coast, South-West
    "17": ClimateZone.C, "22": ClimateZone.C, "29": ClimateZone.C, "32": ClimateZone.C,
    "33": ClimateZone.C, "40": ClimateZone.C, "44": ClimateZone.C, "47": ClimateZone.C,
    "56": ClimateZone.C, "64": ClimateZone.C, "85": ClimateZone.C,

    # Zone D - Paris basin, West, Centre, Pyrenees foothills
    "09": ClimateZone.D, "12": ClimateZone.D, "14": ClimateZone.D, "16": ClimateZone.D,
    "24": ClimateZone.D, "27": ClimateZone.D, "28": ClimateZone.D, "31": ClimateZone.D,
    "35": ClimateZone.D, "36": ClimateZone.D, "37": ClimateZone.D, "41": ClimateZone.D,
    "45": ClimateZone.D, "46": ClimateZone.D, "49": ClimateZone.D, "50": ClimateZone.D,
    "53": ClimateZone.D, "61": ClimateZone.D, "65": ClimateZone.D, "72": ClimateZone.D,
    "75": ClimateZone.D, "76": ClimateZone.D, "77": ClimateZone.D, "78": ClimateZone.D,
    "79": ClimateZone.D, "81": ClimateZone.D, "82": ClimateZone.D, "86": ClimateZone.D,
    "91": ClimateZone.D, "92": ClimateZone.D, "93": ClimateZone.D, "94": ClimateZone.D,
    "95": ClimateZone.D,

    # Zone E - Centre-East, Limousin, Champagne
    "03": ClimateZone.E, "10": ClimateZone.E, "18": ClimateZone.E, "19": ClimateZone.E,
    "23": ClimateZone.E, "51": ClimateZone.E, "58": ClimateZone.E, "87": ClimateZone.E,
    "89": ClimateZone.E,

    # Zone F - North
    "02": ClimateZone.F, "59": ClimateZone.F, "60": ClimateZone.F, "62": ClimateZone.F,
    "80": ClimateZone.F,

    # Zone G - Rhône-Alpes, Massif Central, Burgundy, Jura
    "01": ClimateZone.G, "07": ClimateZone.G, "15": ClimateZone.G, "21": ClimateZone.G,
    "26": ClimateZone.G, "38": ClimateZone.G, "39": ClimateZone.G, "42": ClimateZone.G,
    "43": ClimateZone.G, "48": ClimateZone.G, "52": ClimateZone.G, "63": ClimateZone.G,
    "69": ClimateZone.G, "71": ClimateZone.G, "73": ClimateZone.G, "74": ClimateZone.G,

    # Zone H - North-East, Southern Alps
    "04": ClimateZone.H, "08": ClimateZone.H, "25": ClimateZone.H, "54": ClimateZone.H,
    "55": ClimateZone.H, "57": ClimateZone.H, "67": ClimateZone.H, "68": ClimateZone.H,
    "70": ClimateZone.H, "88": ClimateZone.H, "90": ClimateZone.H,

    # Zone I - High Alpine valleys
    "05": ClimateZone.I,
}

# Corsica shares the "20" prefix; the third digit tells the departments apart
CORSICA_PREFIXES: Dict[str, str] = {
    "200": "2A", "201": "2A",
    "202": "2B", "204": "2B", "206": "2B",
}


def get_department(postal_code: Optional[str]) -> Optional[str]:
    """
    Get the department code of a French postal code.

    Args:
        postal_code: 5-digit postal code, possibly partial while the form is filled

    Returns:
        Department code (e.g. "38", "2A"), or None if it cannot be determined
    """
    code = (postal_code or "").strip().replace(" ", "")
    if len(code) < 2 or not code[:2].isdigit():
        return None

    if code[:2] == "20":
        return CORSICA_PREFIXES.get(code[:3])

    return code[:2]


def get_zone_for_postal_code(postal_code: Optional[str]) -> ClimateZone:
    """
    Get the base temperature zone for a postal code.

    Args:
        postal_code: French postal code

    Returns:
        Climate zone, DEFAULT_CLIMATE_ZONE when the code is unknown
    """
    department = get_department(postal_code)
    zone = DEPARTMENT_CLIMATE_ZONES.get(department) if department else None

    if zone is None:
        logger.debug(f"Postal code {postal_code!r} not mapped, defaulting to zone {DEFAULT_CLIMATE_ZONE.value}")
        return DEFAULT_CLIMATE_ZONE

    return zone


# Data file paths
DATA_DIR = os.path.join(os.path.dirname(__file__), '..', '..', 'data')
BASE_TEMPERATURES_FILE = os.path.join(DATA_DIR, 'base_temperatures.csv')


def get_base_temperatures_file() -> str:
    """Path of the base temperature table, overridable with BASE_TEMPERATURES_FILE"""
    return get_env_path("BASE_TEMPERATURES_FILE", BASE_TEMPERATURES_FILE)


@lru_cache(maxsize=4)
def load_base_temperature_table(path: str) -> Dict[Tuple[ClimateZone, AltitudeBand], float]:
    """
    Load the (climate zone, altitude band) -> base temperature table.

    The table must cover every zone at every altitude band.

    Raises:
        ConfigurationError: file missing, unreadable or incomplete
    """
    table: Dict[Tuple[ClimateZone, AltitudeBand], float] = {}

    try:
        with open(path, 'r', encoding='utf-8') as f:
            reader = csv.DictReader(f)
            for row in reader:
                key = (ClimateZone(row['zone'].strip()), AltitudeBand(row['altitude_band'].strip()))
                table[key] = float(row['temperature'])
    except FileNotFoundError:
        raise ConfigurationError("Base temperature table not found", {"path": path})
    except (KeyError, ValueError) as e:
        raise ConfigurationError("Malformed base temperature table", {"path": path, "error": str(e)})

    missing = [
        f"{zone.value}/{band.value}"
        for zone in ClimateZone
        for band in AltitudeBand
        if (zone, band) not in table
    ]
    if missing:
        raise ConfigurationError("Incomplete base temperature table", {"path": path, "missing": missing})

    logger.info(f"Loaded {len(table)} base temperatures from {path}")
    return table


def get_base_temperature(zone: ClimateZone, band: AltitudeBand) -> float:
    """Direct two-key lookup of the base temperature"""
    return load_base_temperature_table(get_base_temperatures_file())[(zone, band)]
