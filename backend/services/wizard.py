"""
Wizard refresh service
Runs the derived-field update cycle the sizing form performs on every render
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

from pydantic import ValidationError

from app.schemas import WizardStateFile
from domain.calculations.base_temperature import compute_base_temperature
from domain.calculations.zone_loads import (
    ZoneLossResult,
    get_total_losses_w,
    get_zone_results,
    update_zones_losses,
)
from domain.core.climate_zones import AltitudeBand, get_zone_for_postal_code
from domain.models.state import AppState
from services.error_types import StateFileError
from utils.logging_utils import log_operation, log_with_context

logger = logging.getLogger(__name__)


@dataclass
class SizingSummary:
    """Derived values of the wizard after a refresh"""
    climate_zone: str
    altitude_band: str
    seaside: bool
    base_temperature: float
    total_loss_w: float
    zones: List[ZoneLossResult] = field(default_factory=list)

    @property
    def total_loss_kw(self) -> float:
        return self.total_loss_w / 1000.0

    def to_json(self) -> Dict[str, Any]:
        return {
            "climate_zone": self.climate_zone,
            "altitude_band": self.altitude_band,
            "seaside": self.seaside,
            "base_temperature": self.base_temperature,
            "total_loss_w": round(self.total_loss_w, 1),
            "total_loss_kw": round(self.total_loss_kw, 2),
            "zones": [
                {
                    "zone_id": z.zone_id,
                    "name": z.zone_name,
                    "loss_w": round(z.loss_w, 1),
                    "source": z.source,
                    "surface_m2": z.surface_m2,
                    "volume_m3": z.volume_m3,
                    "loss_w_per_m2": round(z.loss_w_per_m2, 1),
                }
                for z in self.zones
            ],
        }


def refresh_derived_fields(state: AppState) -> SizingSummary:
    """
    Bring every derived field of the state up to date, in order:

    1. resolve the base temperature
    2. write it into the beneficiary
    3. recompute each zone loss against it
    4. total the project
    """
    beneficiary = state.beneficiary

    with log_operation("refresh_derived_fields", {"postal_code": beneficiary.postal_code}, logger):
        base_temperature = compute_base_temperature(beneficiary)
        beneficiary.base_temperature = base_temperature

        update_zones_losses(state.project, base_temperature)
        total = get_total_losses_w(state.project)

    summary = SizingSummary(
        climate_zone=get_zone_for_postal_code(beneficiary.postal_code).value,
        altitude_band=AltitudeBand.from_label(beneficiary.altitude_band).value,
        seaside=beneficiary.seaside,
        base_temperature=base_temperature,
        total_loss_w=total,
        zones=get_zone_results(state.project),
    )

    log_with_context("info", f"Total heating load {summary.total_loss_w:.0f} W at {base_temperature}°C", {
        "zone_count": len(summary.zones),
        "climate_zone": summary.climate_zone,
    }, logger)
    return summary


def load_state_file(path: Union[str, Path]) -> AppState:
    """
    Load a saved wizard state.

    Raises:
        StateFileError: file missing or unreadable, not JSON, or not a wizard state
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise StateFileError("State file not found", {"path": str(path)})
    except UnicodeDecodeError as e:
        raise StateFileError("State file is not UTF-8 text", {"path": str(path), "error": str(e)})
    except OSError as e:
        raise StateFileError("State file cannot be read", {"path": str(path), "error": str(e)})
    except json.JSONDecodeError as e:
        raise StateFileError("State file is not valid JSON", {"path": str(path), "error": str(e)})

    try:
        state = WizardStateFile.model_validate(raw).to_domain()
    except ValidationError as e:
        raise StateFileError("State file does not match the wizard schema", {
            "path": str(path),
            "errors": [f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()],
        })

    logger.info(f"Loaded wizard state from {path} with {state.project.zone_count} zones")
    return state
