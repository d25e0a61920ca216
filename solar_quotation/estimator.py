"""
Estimator — prices one ProjectConfig against a PricingTable.

Pure math, no state. Per kW rate × capacity, system-type multiplier,
flat battery / monitoring add-ons, then the subsidy rule table.

Input: ProjectConfig + PricingTable
Output: Estimate (no rounding — formatting belongs to the consumer)
"""

import logging

from .schemas import (
    BatteryOption,
    DEFAULT_PRICING,
    Estimate,
    PricingTable,
    ProjectConfig,
    ProjectType,
    SystemType,
)

logger = logging.getLogger(__name__)


def _residential_ongrid_subsidy(base_cost: float, table: PricingTable) -> float:
    """Rooftop scheme: a share of the equipment cost, capped."""
    return min(table.subsidy_rate * base_cost, table.subsidy_cap)


# Subsidy policy — one explicit entry per eligible (project, system) pair.
# Pairs not listed here get no subsidy.
SUBSIDY_RULES = {
    (ProjectType.RESIDENTIAL, SystemType.ONGRID): _residential_ongrid_subsidy,
}


class Estimator:
    """Derives an Estimate from a configuration snapshot."""

    SYSTEM_MULTIPLIERS = {
        SystemType.ONGRID: 1.00,
        SystemType.OFFGRID: 1.18,
        SystemType.HYBRID: 1.10,
    }
    YIELD_KWH_PER_KW = 1200        # regional average, not location-aware
    GRID_EMISSION_FACTOR = 0.82    # kg CO2 per kWh

    def compute(self, config: ProjectConfig, table: PricingTable = DEFAULT_PRICING) -> Estimate:
        base_cost = self._base_cost(config, table)
        battery_cost = self._battery_cost(config.battery_option, table)
        monitoring_cost = table.monitoring if config.monitoring_enabled else 0.0
        subsidy = self._subsidy(config, base_cost, table)

        gross_cost = base_cost + battery_cost + monitoring_cost
        net_cost = max(0.0, gross_cost - subsidy)

        annual_generation_kwh = config.capacity_kw * self.YIELD_KWH_PER_KW
        co2_offset_tons = annual_generation_kwh * self.GRID_EMISSION_FACTOR / 1000

        logger.debug(
            "Estimate %s/%s %.2f kW: gross=%.2f subsidy=%.2f net=%.2f",
            config.project_type.value, config.system_type.value,
            config.capacity_kw, gross_cost, subsidy, net_cost,
        )

        return Estimate(
            project_type=config.project_type,
            capacity_kw=config.capacity_kw,
            system_type=config.system_type,
            battery_option=config.battery_option,
            monitoring_enabled=config.monitoring_enabled,
            base_cost=base_cost,
            battery_cost=battery_cost,
            monitoring_cost=monitoring_cost,
            subsidy=subsidy,
            gross_cost=gross_cost,
            net_cost=net_cost,
            annual_generation_kwh=annual_generation_kwh,
            co2_offset_tons=co2_offset_tons,
        )

    def _base_cost(self, config: ProjectConfig, table: PricingTable) -> float:
        """Equipment + installation: per kW rate × capacity × system multiplier."""
        base = table.per_kw[config.project_type] * config.capacity_kw
        return base * self.SYSTEM_MULTIPLIERS[config.system_type]

    def _battery_cost(self, option: BatteryOption, table: PricingTable) -> float:
        if option == BatteryOption.NONE:
            return 0.0
        return table.battery[option]

    def _subsidy(self, config: ProjectConfig, base_cost: float, table: PricingTable) -> float:
        rule = SUBSIDY_RULES.get((config.project_type, config.system_type))
        if rule is None:
            return 0.0
        return rule(base_cost, table)


# Stateless — one shared instance is enough
estimator = Estimator()


def compute(config: ProjectConfig, table: PricingTable = DEFAULT_PRICING) -> Estimate:
    return estimator.compute(config, table)
