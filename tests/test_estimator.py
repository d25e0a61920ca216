"""
Estimator tests — pricing rules, subsidy policy, derived figures.

Tests:
1-3.   Worked examples (residential/ongrid, industrial/offgrid, commercial/hybrid)
4-6.   Subsidy rule table (eligibility, cap, never above base share)
7-8.   Net cost invariants across every enum combination
9-10.  Generation and CO2 figures
11-12. Determinism and swappable pricing tables
13-14. Capacity validation
"""

import itertools

import pytest
from pydantic import ValidationError

from solar_quotation.estimator import SUBSIDY_RULES, Estimator, compute
from solar_quotation.schemas import (
    BatteryOption,
    DEFAULT_PRICING,
    PricingTable,
    ProjectConfig,
    ProjectType,
    SystemType,
)


def _config(project="residential", system="ongrid", capacity=3.0, battery="none", monitoring=False):
    return ProjectConfig(
        project_type=project,
        system_type=system,
        capacity_kw=capacity,
        battery_option=battery,
        monitoring_enabled=monitoring,
    )


ALL_COMBINATIONS = list(itertools.product(ProjectType, SystemType, BatteryOption, [True, False]))


# ============================================================
# 1-3. Worked examples
# ============================================================

def test_example_residential_ongrid_3kw():
    """60000 × 3 with the 20% subsidy under the 90000 cap."""
    est = compute(_config(), DEFAULT_PRICING)
    assert est.base_cost == 180000
    assert est.battery_cost == 0
    assert est.monitoring_cost == 0
    assert est.subsidy == pytest.approx(36000)
    assert est.gross_cost == 180000
    assert est.net_cost == pytest.approx(144000)


def test_example_industrial_offgrid_large_battery_monitoring():
    """Off-grid multiplier, flat battery + monitoring, no subsidy."""
    est = compute(_config("industrial", "offgrid", 10, "large", True), DEFAULT_PRICING)
    assert est.base_cost == pytest.approx(590000)
    assert est.battery_cost == 150000
    assert est.monitoring_cost == 8000
    assert est.subsidy == 0
    assert est.gross_cost == pytest.approx(748000)
    assert est.net_cost == pytest.approx(748000)


def test_example_commercial_hybrid_medium_battery():
    est = compute(_config("commercial", "hybrid", 5, "medium", False), DEFAULT_PRICING)
    assert est.base_cost == pytest.approx(302500)
    assert est.battery_cost == 80000
    assert est.monitoring_cost == 0
    assert est.subsidy == 0
    assert est.gross_cost == pytest.approx(382500)
    assert est.net_cost == pytest.approx(382500)


def test_estimate_echoes_configuration():
    config = _config("commercial", "hybrid", 5, "medium", True)
    est = compute(config)
    assert est.project_type == ProjectType.COMMERCIAL
    assert est.system_type == SystemType.HYBRID
    assert est.capacity_kw == 5
    assert est.battery_option == BatteryOption.MEDIUM
    assert est.monitoring_enabled is True


# ============================================================
# 4-6. Subsidy policy
# ============================================================

@pytest.mark.parametrize("project,system,battery,monitoring", ALL_COMBINATIONS)
def test_subsidy_only_for_residential_ongrid(project, system, battery, monitoring):
    est = compute(_config(project, system, 4, battery, monitoring))
    eligible = project == ProjectType.RESIDENTIAL and system == SystemType.ONGRID
    assert (est.subsidy > 0) == eligible


def test_subsidy_capped_for_large_systems():
    """20% of 60000 × 100 kW would be 1.2M — the cap holds it at 90000."""
    est = compute(_config(capacity=100))
    assert est.subsidy == DEFAULT_PRICING.subsidy_cap
    assert est.net_cost == pytest.approx(6000000 - 90000)


def test_subsidy_reaches_cap_exactly_at_7_5_kw():
    est = compute(_config(capacity=7.5))
    assert est.subsidy == pytest.approx(90000)


def test_subsidy_never_exceeds_base_share_or_cap():
    for capacity in (0.5, 1, 3, 7.5, 12, 250):
        est = compute(_config(capacity=capacity))
        assert est.subsidy <= DEFAULT_PRICING.subsidy_cap
        assert est.subsidy <= 0.20 * est.base_cost + 1e-9


def test_subsidy_rules_table_lists_only_residential_ongrid():
    assert set(SUBSIDY_RULES) == {(ProjectType.RESIDENTIAL, SystemType.ONGRID)}


# ============================================================
# 7-8. Net cost invariants
# ============================================================

@pytest.mark.parametrize("project,system,battery,monitoring", ALL_COMBINATIONS)
def test_net_cost_is_gross_minus_subsidy_floor_zero(project, system, battery, monitoring):
    est = compute(_config(project, system, 2.5, battery, monitoring))
    assert est.gross_cost == est.base_cost + est.battery_cost + est.monitoring_cost
    assert est.net_cost == max(0.0, est.gross_cost - est.subsidy)
    assert est.net_cost >= 0


def test_net_cost_floored_when_subsidy_rule_is_generous():
    """A table whose subsidy outstrips the total still yields net 0, never negative."""
    table = DEFAULT_PRICING.model_copy(update={"subsidy_rate": 5.0, "subsidy_cap": 10_000_000.0})
    est = compute(_config(capacity=2), table)
    assert est.subsidy > est.gross_cost
    assert est.net_cost == 0


# ============================================================
# 9-10. Generation and CO2
# ============================================================

def test_annual_generation_is_1200_per_kw():
    for capacity in (1, 3, 4.2, 10):
        est = compute(_config(capacity=capacity))
        assert est.annual_generation_kwh == capacity * 1200


def test_co2_offset_uses_grid_emission_factor():
    est = compute(_config(capacity=3))
    assert est.co2_offset_tons == est.annual_generation_kwh * 0.82 / 1000
    assert est.co2_offset_tons == pytest.approx(2.952)


# ============================================================
# 11-12. Determinism and pricing tables
# ============================================================

def test_compute_is_idempotent():
    config = _config("industrial", "hybrid", 7.3, "small", True)
    assert compute(config) == compute(config)
    assert compute(config).model_dump() == Estimator().compute(config).model_dump()


def test_custom_pricing_table_is_used():
    table = PricingTable(
        per_kw={
            ProjectType.RESIDENTIAL: 40000.0,
            ProjectType.COMMERCIAL: 38000.0,
            ProjectType.INDUSTRIAL: 35000.0,
        },
        battery={
            BatteryOption.SMALL: 1000.0,
            BatteryOption.MEDIUM: 2000.0,
            BatteryOption.LARGE: 3000.0,
        },
        monitoring=500.0,
        subsidy_cap=5000.0,
    )
    est = compute(_config(capacity=2, battery="small", monitoring=True), table)
    assert est.base_cost == 80000
    assert est.battery_cost == 1000
    assert est.monitoring_cost == 500
    assert est.subsidy == 5000
    assert est.net_cost == 76500


def test_partial_pricing_table_rejected():
    """A table missing a project rate or battery price never reaches compute."""
    with pytest.raises(ValidationError):
        PricingTable(
            per_kw={ProjectType.RESIDENTIAL: 1.0},
            battery={},
            monitoring=0,
        )
    with pytest.raises(ValidationError):
        PricingTable(
            per_kw=dict(DEFAULT_PRICING.per_kw),
            battery={BatteryOption.SMALL: 1.0, BatteryOption.MEDIUM: 2.0},
            monitoring=0,
        )


def test_pricing_table_is_immutable():
    with pytest.raises(ValidationError):
        DEFAULT_PRICING.monitoring = 0


# ============================================================
# 13-14. Capacity validation
# ============================================================

@pytest.mark.parametrize("capacity", [0, -3])
def test_non_positive_capacity_rejected(capacity):
    with pytest.raises(ValidationError):
        _config(capacity=capacity)


def test_location_does_not_affect_price():
    a = ProjectConfig(capacity_kw=3, location="Chennai")
    b = ProjectConfig(capacity_kw=3, location="Delhi")
    assert compute(a) == compute(b)
