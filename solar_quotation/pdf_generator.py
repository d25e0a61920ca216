"""
PDF Quote Generator.

Renders an Estimate + CustomerRecord onto a fixed single-page A4 template.
Uses fpdf2 (pure Python, no system dependencies).

Sections, top to bottom:
1. Header (brand mark, title, date, rule)
2. Quotation Details
3. Estimated Pricing
4. Detailed Breakdown
5. Generation / CO2 figures
6. Footer (validity + disclaimer)

Content is bounded, so placement is sequential with fixed offsets — no reflow.
"""

import re
from datetime import date
from typing import Optional

from fpdf import FPDF

from .config import settings
from .schemas import CustomerRecord, Estimate

PLACEHOLDER = "—"

# Built-in fonts draw windows-1252, which has the em dash and bullet
CORE_FONTS_ENCODING = "windows-1252"

# --- Layout (mm) ---
MARGIN_X = 15
LABEL_COL = 25
VALUE_COL = 75
SECOND_LABEL_COL = 115
SECOND_VALUE_COL = 135
PRICE_COL = 150         # right edge shared by every money value
DATE_X = 160
RULE_Y = 48
BODY_TOP = 60
FOOTER_Y = 270

BRAND_BLUE = (25, 113, 194)
BADGE_CYAN = (8, 145, 178)
MUTED_GRAY = (128, 128, 128)

# Every value the template places, in layout order
REQUIRED_FIELDS = (
    "date",
    "customer_name",
    "mobile",
    "email",
    "system_type",
    "capacity",
    "gross_price",
    "subsidy",
    "net_price",
    "equipment_installation",
    "battery",
    "monitoring",
    "annual_generation",
    "co2_offset",
)


def format_currency(amount, symbol: str = None) -> str:
    """Format a number as ₹12,34,567.5 (Indian digit grouping, up to 2 decimals)."""
    symbol = settings.CURRENCY_SYMBOL if symbol is None else symbol
    value = round(float(amount), 2)
    sign = "-" if value < 0 else ""
    whole, frac = f"{abs(value):.2f}".split(".")

    # Last three digits, then groups of two
    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])

    frac = frac.rstrip("0")
    return f"{sign}{symbol}{whole}" + (f".{frac}" if frac else "")


def format_optional_cost(amount) -> str:
    """Zero-valued optional costs show the placeholder, never 0."""
    return format_currency(amount) if amount else PLACEHOLDER


def format_date(day: date) -> str:
    """Short US-style date, e.g. 10/16/2026."""
    return f"{day.month}/{day.day}/{day.year}"


def quote_filename(customer_name: str, ext: str = "pdf") -> str:
    """<name>_solar_quote.pdf with whitespace runs collapsed to underscores."""
    name = re.sub(r"\s+", "_", (customer_name or "").strip()) or "quote"
    return f"{name}_solar_quote.{ext}"


def _fmt_kw(value) -> str:
    """3.0 -> 3, 2.50 -> 2.5"""
    return f"{float(value):.2f}".rstrip("0").rstrip(".")


def _safe(text: str) -> str:
    """Replace Unicode chars that can't be rendered by built-in PDF fonts (windows-1252)."""
    if not text:
        return ""
    return (
        text
        .replace("₹", "Rs.")  # rupee sign
        .replace("₂", "2")    # subscript two
        .encode(CORE_FONTS_ENCODING, errors="replace")
        .decode(CORE_FONTS_ENCODING)
    )


class QuoteDocument(FPDF):
    """
    Single-page quotation.

    Every value placed through place() is recorded in `placed` with its
    canonical text (before any font transliteration), so callers can check
    what the page carries without parsing the PDF stream. `placed_at` holds
    the (x, baseline y) each value was drawn at.
    """

    def __init__(self, font_path: str = ""):
        super().__init__(orientation="P", unit="mm", format="A4")
        self.placed = {}
        self.placed_at = {}
        self.set_auto_page_break(auto=False)
        if font_path:
            self.add_font("QuoteFont", "", font_path)
            self.font_family_name = "QuoteFont"
            self.unicode_text = True
        else:
            self.core_fonts_encoding = CORE_FONTS_ENCODING
            self.font_family_name = "Helvetica"
            self.unicode_text = False
        self.set_font(self.font_family_name, "", 12)

    def header(self):
        pass  # Drawn once by render_quote

    def footer(self):
        pass

    def write_text(self, x: float, y: float, text: str):
        self.text(x, y, text if self.unicode_text else _safe(text))

    def text_width(self, text: str) -> float:
        return self.get_string_width(text if self.unicode_text else _safe(text))

    def place(self, key: str, x: float, y: float, text: str, right_edge: Optional[float] = None):
        """Place a recorded value. With right_edge, the text ends at that column."""
        if key in self.placed:
            raise ValueError(f"Field already placed: {key}")
        self.placed[key] = text
        if right_edge is not None:
            x = right_edge - self.text_width(text)
        self.placed_at[key] = (x, y)
        self.write_text(x, y, text)

    def section_title(self, title: str, y: float, size: int = 14):
        self.set_font_size(size)
        self.write_text(MARGIN_X, y, title)

    def price_row(self, key: str, label: str, value: str, y: float):
        self.write_text(LABEL_COL, y, label)
        self.place(key, PRICE_COL, y, value, right_edge=PRICE_COL)

    def brand_mark(self, logo_path: str = ""):
        if logo_path:
            self.image(logo_path, MARGIN_X, 8, 40, 35)
            return
        # No logo configured: initials badge
        self.set_fill_color(*BADGE_CYAN)
        self.rect(MARGIN_X, 10, 35, 35, style="F")
        self.set_text_color(255, 255, 255)
        self.set_font_size(22)
        initials = "".join(w[0] for w in settings.COMPANY_NAME.split()[:2]).upper()
        self.write_text(MARGIN_X + 17.5 - self.text_width(initials) / 2, 30, initials)
        self.set_text_color(0, 0, 0)


def render_quote(
    estimate: Estimate,
    customer: CustomerRecord,
    issued: Optional[date] = None,
    logo_path: Optional[str] = None,
    font_path: Optional[str] = None,
) -> QuoteDocument:
    """
    Lay out the quotation page.

    Args:
        estimate: computed Estimate (required — callers refuse earlier if missing)
        customer: contact details; blanks render as the placeholder
        issued: date printed in the header (defaults to today)
        logo_path / font_path: override settings.LOGO_PATH / PDF_FONT_PATH

    Returns:
        QuoteDocument — call .output() for the PDF bytes
    """
    logo_path = settings.LOGO_PATH if logo_path is None else logo_path
    font_path = settings.PDF_FONT_PATH if font_path is None else font_path

    pdf = QuoteDocument(font_path=font_path)
    pdf.add_page()

    # ── Header ──
    pdf.brand_mark(logo_path)
    pdf.set_text_color(0, 0, 0)
    pdf.set_font_size(24)
    pdf.write_text(60, 22, settings.COMPANY_NAME.upper())
    pdf.set_font_size(16)
    pdf.write_text(60, 29, settings.COMPANY_TAGLINE)

    pdf.set_font_size(12)
    pdf.write_text(DATE_X, 19, "Date: ")
    pdf.place("date", DATE_X + pdf.text_width("Date: "), 19, format_date(issued or date.today()))

    pdf.set_line_width(1)
    pdf.line(MARGIN_X, RULE_Y, 190, RULE_Y)

    # ── Quotation details ──
    y = BODY_TOP
    pdf.section_title("QUOTATION DETAILS", y)
    y += 8

    pdf.set_font_size(11)
    pdf.write_text(LABEL_COL, y, "Customer Name:")
    pdf.place("customer_name", VALUE_COL, y, customer.name or PLACEHOLDER)
    y += 7

    pdf.write_text(LABEL_COL, y, "Mobile:")
    pdf.place("mobile", VALUE_COL, y, customer.mobile or PLACEHOLDER)
    pdf.write_text(SECOND_LABEL_COL, y, "Email:")
    pdf.place("email", SECOND_VALUE_COL, y, customer.email or PLACEHOLDER)
    y += 7

    pdf.write_text(LABEL_COL, y, "System Type:")
    pdf.place(
        "system_type", VALUE_COL, y,
        f"{estimate.project_type.value} • {estimate.system_type.value}",
    )
    y += 7

    pdf.write_text(LABEL_COL, y, "Capacity:")
    pdf.place("capacity", VALUE_COL, y, f"{_fmt_kw(estimate.capacity_kw)} kW")
    y += 10

    # ── Estimated pricing ──
    pdf.section_title("ESTIMATED PRICING", y)
    y += 8

    pdf.set_font_size(11)
    pdf.price_row("gross_price", "Gross Price:", format_currency(estimate.gross_cost), y)
    y += 7

    subsidy = f"- {format_currency(estimate.subsidy)}" if estimate.subsidy else PLACEHOLDER
    pdf.price_row("subsidy", "Subsidy:", subsidy, y)
    y += 8

    pdf.set_font_size(14)
    pdf.write_text(LABEL_COL, y, "NET PRICE:")
    pdf.set_font_size(12)
    pdf.set_text_color(*BRAND_BLUE)
    pdf.place("net_price", PRICE_COL, y, format_currency(estimate.net_cost), right_edge=PRICE_COL)
    pdf.set_text_color(0, 0, 0)
    y += 10

    # ── Detailed breakdown ──
    pdf.section_title("DETAILED BREAKDOWN:", y, size=12)
    y += 8

    pdf.set_font_size(11)
    pdf.price_row(
        "equipment_installation", "Equipment & Installation:",
        format_currency(estimate.base_cost), y,
    )
    y += 7
    pdf.price_row("battery", "Battery:", format_optional_cost(estimate.battery_cost), y)
    y += 7
    pdf.price_row("monitoring", "Monitoring:", format_optional_cost(estimate.monitoring_cost), y)
    y += 10

    # ── Generation figures ──
    pdf.set_font_size(10)
    pdf.write_text(LABEL_COL, y, "Annual Generation Estimate:")
    pdf.place("annual_generation", VALUE_COL, y, f"{round(estimate.annual_generation_kwh)} kWh")
    y += 6
    pdf.write_text(LABEL_COL, y, "CO₂ Offset:")
    pdf.place("co2_offset", VALUE_COL, y, f"{estimate.co2_offset_tons:.2f} tons/year")

    # ── Footer ──
    pdf.set_font_size(9)
    pdf.set_text_color(*MUTED_GRAY)
    pdf.write_text(
        MARGIN_X, FOOTER_Y,
        f"© {settings.COMPANY_NAME} - Valid for {settings.QUOTE_VALID_DAYS} days",
    )
    pdf.write_text(
        MARGIN_X, FOOTER_Y + 5,
        "This is a preliminary estimate. Final quote subject to site survey.",
    )
    pdf.set_text_color(0, 0, 0)

    return pdf


def generate_quote_pdf(estimate: Estimate, customer: CustomerRecord, **kwargs) -> bytes:
    """Render and serialize in one step. Returns PDF bytes."""
    return bytes(render_quote(estimate, customer, **kwargs).output())
