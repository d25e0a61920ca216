from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    COMPANY_NAME: str = "Solar Captures"
    COMPANY_TAGLINE: str = "Instant Quotation"
    CONTACT_NUMBER: str = "9176279197"
    CURRENCY_SYMBOL: str = "₹"
    QUOTE_VALID_DAYS: int = 7

    # Where downloaded quotes are written by QuoteSession
    OUTPUT_DIR: str = "./quotes"

    # Optional assets — the PDF falls back to a drawn badge and core fonts
    LOGO_PATH: str = ""
    PDF_FONT_PATH: str = ""

    class Config:
        env_file = ".env"


settings = Settings()
