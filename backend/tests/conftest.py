"""
Pytest configuration and fixtures
"""
import json

import pytest

from domain.core.climate_zones import load_base_temperature_table
from domain.models.state import AppState, Beneficiary
from domain.models.zones import Project, Zone


@pytest.fixture(autouse=True)
def clear_table_cache(monkeypatch):
    """Each test sees the packaged base temperature table unless it overrides it"""
    monkeypatch.delenv("BASE_TEMPERATURES_FILE", raising=False)
    load_base_temperature_table.cache_clear()
    yield
    load_base_temperature_table.cache_clear()


@pytest.fixture
def app_state():
    """Fresh wizard state, as created at session start"""
    return AppState()


@pytest.fixture
def paris_beneficiary():
    """Mild default climate zone, lowest altitude band"""
    return Beneficiary(postal_code="75001", altitude_band="0-200", seaside=False)


@pytest.fixture
def grenoble_beneficiary():
    """Mountain climate zone at 1201-1400 m"""
    return Beneficiary(postal_code="38000", altitude_band="1201-1400", seaside=False)


@pytest.fixture
def living_room():
    """50 m² room, 2.5 m high, RE2020 isolation, heated to 20°C"""
    return Zone(
        name="Séjour",
        surface=50,
        height=2.5,
        isolation="Isolation norme RE2020",
        ambient_temp=20,
        manual_override=False,
        manual_loss="",
    )


@pytest.fixture
def single_zone_project(living_room):
    return Project(zones=[living_room])


@pytest.fixture
def state_file(tmp_path):
    """Write a wizard state dict to a JSON file and return its path"""
    def _write(data, name="state.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def sample_state_data():
    """Saved wizard state with two zones, one of them overridden"""
    return {
        "step": 3,
        "installer": {"company": "Thermique Alpes", "address": "1 rue du Lac", "siret": "12345678900011"},
        "beneficiary": {
            "first_name": "Camille",
            "last_name": "Martin",
            "address": "4 chemin des Crêtes",
            "postal_code": "38000",
            "city": "Grenoble",
            "construction_year": 1985,
            "seaside": False,
            "altitude_band": "1201-1400",
        },
        "project": {
            "zones": [
                {
                    "zone_id": "living",
                    "name": "Séjour",
                    "surface": 40,
                    "height": 2.5,
                    "isolation": "Isolation norme RT2012",
                    "ambient_temp": 20,
                },
                {
                    "zone_id": "attic",
                    "name": "Combles",
                    "surface": "20",
                    "height": "2,4",
                    "isolation": "Isolation moyenne (1975-2000)",
                    "ambient_temp": 18,
                    "manual_override": True,
                    "manual_loss": "1 500",
                },
            ]
        },
        "technology": {"type": "air-eau", "model": "PAC-12", "source_temperature": -7, "units": 1},
    }
