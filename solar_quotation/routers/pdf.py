"""
PDF download endpoint.

POST /api/quotes/pdf — render the posted estimate for a customer.

The client sends back the Estimate it was given by /api/estimate; without one
the request is refused instead of producing an empty quote.
"""

import logging
from urllib.parse import quote

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from ..errors import EXPORT_FAILED_NOTICE, MISSING_ESTIMATE_NOTICE
from ..pdf_generator import generate_quote_pdf, quote_filename
from ..schemas import QuotePdfRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quotes", tags=["pdf"])


@router.post("/pdf")
def download_pdf(request: QuotePdfRequest):
    """
    Generate and download a PDF quote document.

    Returns: application/pdf named <customer>_solar_quote.pdf
    """
    if request.estimate is None:
        raise HTTPException(status_code=400, detail=MISSING_ESTIMATE_NOTICE)

    try:
        pdf_bytes = generate_quote_pdf(request.estimate, request.customer)
    except Exception:
        logger.exception("Error generating PDF")
        raise HTTPException(status_code=500, detail=EXPORT_FAILED_NOTICE)

    filename = quote_filename(request.customer.name)
    ascii_name = filename.encode("ascii", errors="replace").decode("ascii").replace("?", "_")
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": (
                f'attachment; filename="{ascii_name}"; '
                f"filename*=UTF-8''{quote(filename)}"
            ),
        },
    )
