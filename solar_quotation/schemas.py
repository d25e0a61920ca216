from pydantic import BaseModel, Field, model_validator
from typing import Dict, Optional
import enum


# --- Enums ---

class ProjectType(str, enum.Enum):
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    INDUSTRIAL = "industrial"


class SystemType(str, enum.Enum):
    ONGRID = "ongrid"
    OFFGRID = "offgrid"
    HYBRID = "hybrid"


class BatteryOption(str, enum.Enum):
    NONE = "none"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class Timeline(str, enum.Enum):
    WITHIN_1_MONTH = "Within 1 month"
    ONE_TO_3_MONTHS = "1–3 months"
    FLEXIBLE = "Flexible"


# Display names used by the form and the PDF
PROJECT_TYPE_NAMES = {
    ProjectType.RESIDENTIAL: "Residential",
    ProjectType.COMMERCIAL: "Commercial",
    ProjectType.INDUSTRIAL: "Industrial",
}

SYSTEM_TYPE_NAMES = {
    SystemType.ONGRID: "On-Grid",
    SystemType.OFFGRID: "Off-Grid",
    SystemType.HYBRID: "Hybrid",
}

BATTERY_OPTION_NAMES = {
    BatteryOption.NONE: "None",
    BatteryOption.SMALL: "Small (2–5 kWh)",
    BatteryOption.MEDIUM: "Medium (6–12 kWh)",
    BatteryOption.LARGE: "Large (13–30 kWh)",
}


# --- Inputs ---

class CustomerRecord(BaseModel):
    name: str = ""
    mobile: str = ""
    email: str = ""

    class Config:
        frozen = True


class ProjectConfig(BaseModel):
    project_type: ProjectType = ProjectType.RESIDENTIAL
    system_type: SystemType = SystemType.ONGRID
    capacity_kw: float = Field(3.0, gt=0)
    battery_option: BatteryOption = BatteryOption.NONE
    monitoring_enabled: bool = False
    customer: CustomerRecord = CustomerRecord()
    timeline: Timeline = Timeline.WITHIN_1_MONTH
    location: str = ""  # collected, never priced

    class Config:
        frozen = True


class PricingTable(BaseModel):
    """Flat local price list. Never mutated — build a new table to change prices."""
    per_kw: Dict[ProjectType, float]
    battery: Dict[BatteryOption, float]
    monitoring: float
    subsidy_rate: float = 0.20
    subsidy_cap: float = 90000.0

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_complete(self):
        """Every project type needs a rate and every battery size a price."""
        missing = [p.value for p in ProjectType if p not in self.per_kw]
        missing += [b.value for b in BatteryOption if b != BatteryOption.NONE and b not in self.battery]
        if missing:
            raise ValueError(f"Pricing table has no price for: {', '.join(missing)}")
        return self


DEFAULT_PRICING = PricingTable(
    per_kw={
        ProjectType.RESIDENTIAL: 60000.0,
        ProjectType.COMMERCIAL: 55000.0,
        ProjectType.INDUSTRIAL: 50000.0,
    },
    battery={
        BatteryOption.SMALL: 35000.0,
        BatteryOption.MEDIUM: 80000.0,
        BatteryOption.LARGE: 150000.0,
    },
    monitoring=8000.0,
)


# --- Outputs ---

class Estimate(BaseModel):
    project_type: ProjectType
    capacity_kw: float
    system_type: SystemType
    battery_option: BatteryOption
    monitoring_enabled: bool
    base_cost: float
    battery_cost: float
    monitoring_cost: float
    subsidy: float
    gross_cost: float
    net_cost: float
    annual_generation_kwh: float
    co2_offset_tons: float

    class Config:
        frozen = True


class QuotePdfRequest(BaseModel):
    estimate: Optional[Estimate] = None
    customer: CustomerRecord = CustomerRecord()
