import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./marketplace.db")

# Frontend origins allowed to call the API (comma separated)
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

# Search defaults
# Destination search (programs/retreats) and nearby property search have
# historically used different radii; both are kept configurable.
SEARCH_DEFAULT_RADIUS_MILES = float(os.getenv("SEARCH_DEFAULT_RADIUS_MILES", "200"))
NEARBY_DEFAULT_RADIUS_MILES = float(os.getenv("NEARBY_DEFAULT_RADIUS_MILES", "20"))
SEARCH_DEFAULT_PAGE_SIZE = int(os.getenv("SEARCH_DEFAULT_PAGE_SIZE", "10"))
NEARBY_RESULT_LIMIT = int(os.getenv("NEARBY_RESULT_LIMIT", "10"))

# Geocoding (Nominatim-compatible provider)
NOMINATIM_BASE_URL = os.getenv("NOMINATIM_BASE_URL", "https://nominatim.openstreetmap.org").rstrip(
    "/"
)
# Required by Nominatim policy (include a way to contact you)
NOMINATIM_USER_AGENT = os.getenv(
    "NOMINATIM_USER_AGENT", "RetreatMarketplace/1.0 (support@retreat-marketplace.com)"
)
GEOCODING_TIMEOUT_SECONDS = float(os.getenv("GEOCODING_TIMEOUT_SECONDS", "8.0"))
