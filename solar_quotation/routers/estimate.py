"""
Estimate API — stateless pricing for the quotation form.

POST /api/estimate  — price a ProjectConfig
GET  /api/pricing   — active pricing table
GET  /api/contact   — sales chat link
GET  /api/options   — form choices with display labels
"""

from fastapi import APIRouter

from ..contact import contact_link
from ..estimator import compute
from ..schemas import (
    BATTERY_OPTION_NAMES,
    DEFAULT_PRICING,
    PROJECT_TYPE_NAMES,
    SYSTEM_TYPE_NAMES,
    Estimate,
    PricingTable,
    ProjectConfig,
    Timeline,
)

router = APIRouter(tags=["estimate"])


@router.post("/estimate", response_model=Estimate)
def create_estimate(config: ProjectConfig):
    """Recomputed from scratch on every call — the form posts after each change."""
    return compute(config, DEFAULT_PRICING)


@router.get("/pricing", response_model=PricingTable)
def get_pricing():
    return DEFAULT_PRICING


@router.get("/contact")
def get_contact():
    return {"url": contact_link()}


def _choices(names: dict) -> list:
    return [{"value": option.value, "label": label} for option, label in names.items()]


@router.get("/options")
def get_options():
    """Select options for the form, in display order."""
    return {
        "project_type": _choices(PROJECT_TYPE_NAMES),
        "system_type": _choices(SYSTEM_TYPE_NAMES),
        "battery_option": _choices(BATTERY_OPTION_NAMES),
        "timeline": [{"value": t.value, "label": t.value} for t in Timeline],
    }
