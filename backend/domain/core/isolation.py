"""
Isolation Classes and Volumetric Loss Coefficients
Static coefficients (W per m³ per °C) used by the zone loss calculator
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)


class IsolationClass(str, Enum):
    """Isolation quality of a zone, labelled as in the project form"""
    RE2020 = "Isolation norme RE2020"
    RT2012 = "Isolation norme RT2012"
    RT2005 = "Isolation norme RT2005"
    RT2000 = "Isolation norme RT2000"
    AVERAGE = "Isolation moyenne (1975-2000)"
    WEAK = "Isolation faible (avant 1975)"
    NONE = "Aucune isolation"
    UNKNOWN = "Inconnue"

    @classmethod
    def from_label(cls, label: Any) -> "IsolationClass":
        """Resolve a form label, unrecognized labels become UNKNOWN"""
        if isinstance(label, cls):
            return label
        try:
            return cls("" if label is None else str(label).strip())
        except ValueError:
            logger.debug(f"Unknown isolation class {label!r}")
            return cls.UNKNOWN


ISOLATION_COEFFICIENTS: Dict[IsolationClass, float] = {
    IsolationClass.RE2020: 0.4,
    IsolationClass.RT2012: 0.6,
    IsolationClass.RT2005: 0.75,
    IsolationClass.RT2000: 0.9,
    IsolationClass.AVERAGE: 1.2,
    IsolationClass.WEAK: 1.6,
    IsolationClass.NONE: 2.0,
    # Unknown envelopes are sized as uninsulated
    IsolationClass.UNKNOWN: 2.0,
}

# Class given to zones created before the user picks one
DEFAULT_ISOLATION_CLASS = IsolationClass.RT2012


def isolation_coefficient(isolation: Union[str, IsolationClass, None]) -> float:
    """Get the volumetric loss coefficient of an isolation class"""
    return ISOLATION_COEFFICIENTS[IsolationClass.from_label(isolation)]


def suggest_isolation_class(construction_year: Union[str, int, None]) -> Optional[IsolationClass]:
    """
    Suggest an isolation class from the construction year of the dwelling.
    The thermal regulation in force at build time sets the floor of the envelope quality.

    Returns:
        Suggested class, or None when the year is blank or not a year
    """
    try:
        year = int(str(construction_year).strip())
    except (TypeError, ValueError):
        return None

    if year >= 2022:
        return IsolationClass.RE2020
    elif year >= 2013:
        return IsolationClass.RT2012
    elif year >= 2006:
        return IsolationClass.RT2005
    elif year >= 2001:
        return IsolationClass.RT2000
    elif year >= 1975:
        return IsolationClass.AVERAGE
    else:
        return IsolationClass.WEAK
