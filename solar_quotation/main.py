from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .routers import estimate, pdf

logger = logging.getLogger("solar_quotation")

app = FastAPI(
    title="Solar Quotation Service",
    description=f"Instant solar installation quotes for {settings.COMPANY_NAME}",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(estimate.router, prefix="/api")
app.include_router(pdf.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "solar-quotation"}


@app.on_event("startup")
def log_startup():
    logger.info("Quotation service ready for %s", settings.COMPANY_NAME)
