"""
Quote export errors.

Raised by the export step and caught at the QuoteSession / router boundary,
where they become user-facing notices. None of them is fatal.
"""

MISSING_ESTIMATE_NOTICE = "Please generate a quote first before downloading."
EXPORT_FAILED_NOTICE = "Error generating PDF. Please try again."
AUTO_EXPORT_FAILED_NOTICE = (
    "Quote generated successfully! Please use the Download PDF button below."
)


class QuoteError(Exception):
    """Base class for recoverable quote errors."""

    notice = EXPORT_FAILED_NOTICE


class MissingEstimateError(QuoteError):
    """Export was requested before any estimate was computed."""

    notice = MISSING_ESTIMATE_NOTICE


class QuoteExportError(QuoteError):
    """Rendering the document or writing the file failed."""
