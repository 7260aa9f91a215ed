"""
Tests for zone loss calculation, manual override and aggregation
"""

import pytest

from domain.calculations.base_temperature import compute_base_temperature
from domain.calculations.zone_loads import (
    compute_zone_loss,
    ensure_zones_initialized,
    get_total_losses_w,
    get_zone_results,
    update_zones_losses,
)
from domain.core.isolation import DEFAULT_ISOLATION_CLASS, IsolationClass
from domain.models.zones import ManualLoss, ManualLossStatus, Project, Zone


class TestZoneLossFormula:
    """Non-override path: surface * height * coefficient * (ambient - base)"""

    def test_re2020_zone_in_paris(self, paris_beneficiary, single_zone_project):
        """50 m² x 2.5 m, RE2020, 20°C against -7°C is 1350 W"""
        base = compute_base_temperature(paris_beneficiary)
        update_zones_losses(single_zone_project, base)

        zone = single_zone_project.zones[0]
        assert zone.calculated_loss == pytest.approx(1350, abs=1e-6)
        assert get_total_losses_w(single_zone_project) == pytest.approx(1350, abs=1e-6)

    def test_text_fields_are_parsed(self):
        """Form text with a decimal comma is read as a number"""
        zone = Zone(surface="50", height="2,5", isolation="Isolation norme RE2020", ambient_temp="20")
        assert compute_zone_loss(zone, -7) == pytest.approx(1350)

    def test_blank_fields_count_as_zero(self):
        zone = Zone(surface="", height=2.5, isolation="Isolation norme RE2020", ambient_temp=20)
        assert compute_zone_loss(zone, -7) == 0

    def test_unknown_isolation_uses_conservative_coefficient(self):
        """Unknown classes are sized as uninsulated (2.0 W/m³·K)"""
        zone = Zone(surface=10, height=2.5, isolation="Isolation en paille", ambient_temp=20)
        assert compute_zone_loss(zone, 0) == pytest.approx(10 * 2.5 * 2.0 * 20)

    def test_missing_isolation_uses_conservative_coefficient(self):
        zone = Zone(surface=10, height=2.5, isolation=None, ambient_temp=20)
        assert compute_zone_loss(zone, 0) == pytest.approx(10 * 2.5 * 2.0 * 20)

    def test_non_text_isolation_uses_conservative_coefficient(self):
        zone = Zone(surface=10, height=2.5, isolation=1, ambient_temp=20)
        assert compute_zone_loss(zone, 0) == pytest.approx(10 * 2.5 * 2.0 * 20)

    def test_better_isolation_loses_less(self):
        """Coefficients decrease as isolation improves"""
        losses = [
            compute_zone_loss(Zone(surface=30, height=2.5, isolation=cls, ambient_temp=20), -7)
            for cls in (IsolationClass.NONE, IsolationClass.WEAK, IsolationClass.AVERAGE,
                        IsolationClass.RT2000, IsolationClass.RT2005, IsolationClass.RT2012,
                        IsolationClass.RE2020)
        ]
        assert losses == sorted(losses, reverse=True)

    def test_negative_geometry_is_not_clamped(self):
        """The engine returns the formula value; flagging bad input is the form's job"""
        zone = Zone(surface=-10, height=2.5, isolation="Isolation norme RE2020", ambient_temp=20)
        assert compute_zone_loss(zone, -7) == pytest.approx(-270)

    def test_ambient_below_base_gives_negative_loss(self):
        zone = Zone(surface=10, height=2, isolation="Isolation norme RE2020", ambient_temp=-10)
        assert compute_zone_loss(zone, -7) == pytest.approx(10 * 2 * 0.4 * -3)


class TestManualOverride:
    """Override path"""

    def test_override_replaces_formula(self, paris_beneficiary, single_zone_project):
        """Manual 2000 W wins over the 1350 W formula result"""
        base = compute_base_temperature(paris_beneficiary)
        update_zones_losses(single_zone_project, base)

        zone = single_zone_project.zones[0]
        zone.manual_override = True
        zone.manual_loss = "2000"
        update_zones_losses(single_zone_project, base)

        assert get_total_losses_w(single_zone_project) == 2000

    @pytest.mark.parametrize("manual_loss", ["abc", "", "   ", None, "-50", "nan", "inf"])
    def test_invalid_manual_value_gives_zero(self, living_room, manual_loss):
        """Blank or invalid manual values give 0 W, not an error and not the formula"""
        living_room.manual_override = True
        living_room.manual_loss = manual_loss
        assert compute_zone_loss(living_room, -7) == 0

    def test_manual_value_ignored_without_override(self, living_room):
        living_room.manual_loss = "5000"
        assert compute_zone_loss(living_room, -7) == pytest.approx(1350)

    @pytest.mark.parametrize("manual_loss,expected", [
        ("2000", 2000.0),
        (" 2000 ", 2000.0),
        ("2 000", 2000.0),
        ("1500,5", 1500.5),
        ("0", 0.0),
        (750, 750.0),
        (750.25, 750.25),
    ])
    def test_manual_value_parsing(self, living_room, manual_loss, expected):
        living_room.manual_override = True
        living_room.manual_loss = manual_loss
        assert compute_zone_loss(living_room, -7) == expected


class TestManualLoss:
    """Manual loss sum type"""

    def test_unset(self):
        assert ManualLoss.parse("").status is ManualLossStatus.UNSET
        assert ManualLoss.parse(None).status is ManualLossStatus.UNSET

    def test_invalid(self):
        entry = ManualLoss.parse("deux mille")
        assert entry.status is ManualLossStatus.INVALID
        assert entry.watts == 0

    def test_negative_is_invalid(self):
        assert ManualLoss.parse("-1").status is ManualLossStatus.INVALID

    def test_valid(self):
        entry = ManualLoss.parse("2000")
        assert entry.status is ManualLossStatus.VALID
        assert entry.watts == 2000


class TestUpdateAndAggregate:
    """update_zones_losses and get_total_losses_w"""

    def test_update_is_idempotent(self, single_zone_project, living_room):
        second = Zone(surface=12, height=2.4, isolation="Aucune isolation", ambient_temp=18,
                      manual_override=True, manual_loss="900")
        single_zone_project.add_zone(second)

        update_zones_losses(single_zone_project, -21)
        first_pass = [z.calculated_loss for z in single_zone_project.zones]
        update_zones_losses(single_zone_project, -21)
        second_pass = [z.calculated_loss for z in single_zone_project.zones]

        assert first_pass == second_pass

    def test_empty_project_total_is_zero(self):
        assert get_total_losses_w(Project()) == 0

    def test_total_sums_all_zones(self):
        project = Project(zones=[
            Zone(surface=20, height=2.5, isolation="Isolation norme RE2020", ambient_temp=20),
            Zone(manual_override=True, manual_loss="1000"),
        ])
        update_zones_losses(project, -7)
        assert get_total_losses_w(project) == pytest.approx(20 * 2.5 * 0.4 * 27 + 1000)

    def test_total_does_not_recompute(self, single_zone_project):
        """The aggregator reads stored values only"""
        update_zones_losses(single_zone_project, -7)
        single_zone_project.zones[0].surface = 100
        assert get_total_losses_w(single_zone_project) == pytest.approx(1350)

    def test_zone_order_does_not_change_total(self):
        zones = [
            Zone(surface=20, height=2.5, isolation="Isolation norme RT2005", ambient_temp=19),
            Zone(surface=35, height=2.7, isolation="Isolation faible (avant 1975)", ambient_temp=21),
            Zone(manual_override=True, manual_loss="640"),
        ]
        forward = Project(zones=list(zones))
        backward = Project(zones=list(reversed(zones)))
        update_zones_losses(forward, -10)
        total_forward = get_total_losses_w(forward)
        update_zones_losses(backward, -10)
        assert get_total_losses_w(backward) == pytest.approx(total_forward)

    def test_zone_results(self, single_zone_project):
        update_zones_losses(single_zone_project, -7)
        [result] = get_zone_results(single_zone_project)
        assert result.source == "formula"
        assert result.volume_m3 == pytest.approx(125)
        assert result.loss_w_per_m2 == pytest.approx(27)


class TestEnsureZonesInitialized:
    """Lazy creation of the first zone"""

    def test_creates_default_zone(self):
        project = Project()
        ensure_zones_initialized(project)

        assert project.zone_count == 1
        zone = project.zones[0]
        assert zone.surface == 0
        assert zone.height == 0
        assert zone.isolation == DEFAULT_ISOLATION_CLASS
        assert zone.ambient_temp == 20
        assert zone.manual_override is False
        assert zone.calculated_loss == 0

    def test_keeps_existing_zones(self, single_zone_project, living_room):
        ensure_zones_initialized(single_zone_project)
        assert single_zone_project.zones == [living_room]

    def test_default_zone_has_zero_loss(self):
        project = Project()
        ensure_zones_initialized(project)
        update_zones_losses(project, -15)
        assert get_total_losses_w(project) == 0
