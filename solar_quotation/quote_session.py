"""
Quote session — state behind the 3-step quotation form.

Step 1: project parameters (type, system, capacity, location, battery, monitoring)
Step 2: customer contact + timeline
Step 3: review, generate, download

The session holds the current ProjectConfig and the last committed Estimate.
Once an estimate exists, every change to a priced field recomputes it, so the
displayed figures never lag the form. Export goes through export_quote and
every failure comes back as an ExportOutcome notice — nothing is raised to the
host.
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from .config import settings
from .contact import contact_link
from .errors import (
    AUTO_EXPORT_FAILED_NOTICE,
    EXPORT_FAILED_NOTICE,
    MISSING_ESTIMATE_NOTICE,
    MissingEstimateError,
    QuoteExportError,
)
from .estimator import compute
from .exporter import export_quote
from .schemas import DEFAULT_PRICING, Estimate, PricingTable, ProjectConfig

logger = logging.getLogger(__name__)

FIRST_STEP = 1
LAST_STEP = 3

# Form field -> CustomerRecord attribute
CUSTOMER_FIELDS = {
    "customer_name": "name",
    "customer_mobile": "mobile",
    "customer_email": "email",
}

# Fields that feed the Estimator; location and timeline are informational
PRICED_FIELDS = {
    "project_type",
    "system_type",
    "capacity_kw",
    "battery_option",
    "monitoring_enabled",
}


class ExportOutcome(BaseModel):
    ok: bool
    notice: str
    path: Optional[Path] = None
    estimate: Optional[Estimate] = None


class QuoteSession:
    """One customer's pass through the form. Not shared between users."""

    def __init__(
        self,
        config: Optional[ProjectConfig] = None,
        table: PricingTable = DEFAULT_PRICING,
        output_dir=None,
        **render_options,
    ):
        self.config = config or ProjectConfig()
        self.table = table
        self.output_dir = Path(output_dir or settings.OUTPUT_DIR)
        self.render_options = render_options
        self.step = FIRST_STEP
        self.estimate: Optional[Estimate] = None

    # --- Steps ---

    def next_step(self) -> int:
        if self.step < LAST_STEP:
            self.step += 1
        return self.step

    def prev_step(self) -> int:
        if self.step > FIRST_STEP:
            self.step -= 1
        return self.step

    # --- Form fields ---

    def update_field(self, field: str, value):
        """
        Set one form field. Validation errors from ProjectConfig propagate
        (e.g. capacity_kw <= 0) and leave the session unchanged.
        """
        data = self.config.model_dump()
        if field in CUSTOMER_FIELDS:
            data["customer"][CUSTOMER_FIELDS[field]] = value
        elif field in ProjectConfig.model_fields and field != "customer":
            data[field] = value
        else:
            raise KeyError(f"Unknown form field: {field}")

        self.config = ProjectConfig(**data)

        if field in PRICED_FIELDS and self.estimate is not None:
            self.estimate = compute(self.config, self.table)

    # --- Actions ---

    def generate(self) -> Estimate:
        """Compute and commit the estimate for the current configuration."""
        self.estimate = compute(self.config, self.table)
        return self.estimate

    async def download_pdf(self) -> ExportOutcome:
        """Export the committed estimate. Refuses when nothing was generated."""
        try:
            path = await export_quote(
                self.estimate, self.config.customer, self.output_dir, **self.render_options
            )
        except MissingEstimateError:
            logger.info("PDF download requested before a quote was generated")
            return ExportOutcome(ok=False, notice=MISSING_ESTIMATE_NOTICE)
        except QuoteExportError as e:
            logger.error("Error generating PDF: %s", e)
            return ExportOutcome(ok=False, notice=EXPORT_FAILED_NOTICE, estimate=self.estimate)

        return ExportOutcome(
            ok=True, notice=f"Saved {path.name}", path=path, estimate=self.estimate,
        )

    async def generate_quote(self) -> ExportOutcome:
        """Commit the estimate, then export it. The estimate survives a failed export."""
        estimate = self.generate()
        outcome = await self.download_pdf()
        if not outcome.ok:
            logger.warning("Auto-download after generate failed: %s", outcome.notice)
            return ExportOutcome(ok=False, notice=AUTO_EXPORT_FAILED_NOTICE, estimate=estimate)
        return outcome

    def share_link(self) -> str:
        return contact_link()
