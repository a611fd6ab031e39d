"""
Environment settings loaded from .env file.
"""
import os
from dotenv import load_dotenv

load_dotenv()


# --- Display defaults ---
DEFAULT_LOCALE: str = os.getenv("FUNDKIT_LOCALE", "en-IN")
DEFAULT_CURRENCY: str = os.getenv("FUNDKIT_CURRENCY", "INR")

# --- Identifier rules ---
IDENTIFIER_REGION: str = os.getenv("FUNDKIT_REGION", "IN")

# --- Collection queries ---
DEFAULT_PAGE_SIZE: int = int(os.getenv("FUNDKIT_PAGE_SIZE", "10"))

# --- Logging ---
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
