"""
Quote export — render the PDF and save it under its download filename.

Async so the host can await the file write; there is no cancellation, an
export runs to completion or raises.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

from .errors import MissingEstimateError, QuoteExportError
from .pdf_generator import generate_quote_pdf, quote_filename
from .schemas import CustomerRecord, Estimate

logger = logging.getLogger(__name__)


async def export_quote(
    estimate: Optional[Estimate],
    customer: CustomerRecord,
    output_dir,
    **render_options,
) -> Path:
    """
    Write <name>_solar_quote.pdf into output_dir and return its path.

    Raises:
        MissingEstimateError: no estimate yet — nothing is written
        QuoteExportError: rendering or the file write failed
    """
    if estimate is None:
        raise MissingEstimateError("No estimate to export")

    target = Path(output_dir) / quote_filename(customer.name)
    partial = target.with_name(target.name + ".part")
    try:
        pdf_bytes = generate_quote_pdf(estimate, customer, **render_options)
        target.parent.mkdir(parents=True, exist_ok=True)
        await asyncio.to_thread(partial.write_bytes, pdf_bytes)
        partial.replace(target)
    except Exception as e:
        # A failed write leaves neither a truncated PDF nor the .part file
        partial.unlink(missing_ok=True)
        raise QuoteExportError(f"Could not export {target.name}: {e}") from e

    logger.info("Exported quote to %s (%d bytes)", target, len(pdf_bytes))
    return target
