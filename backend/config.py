"""Configuration management for the Document Key-Term Viewer."""
import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Server Configuration
PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")  # "text" or "json"

# CORS Configuration
CORS_ORIGINS = os.getenv(
    "CORS_ORIGINS",
    "http://localhost:3000,http://localhost:3001"
).split(",")

# Document Loading Configuration
FETCH_TIMEOUT = float(os.getenv("FETCH_TIMEOUT", "30.0"))  # seconds
MAX_DOCUMENT_BYTES = int(os.getenv("MAX_DOCUMENT_BYTES", str(50 * 1024 * 1024)))
UPLOAD_CHUNK_SIZE = 1024 * 1024  # bytes read per step when enforcing MAX_DOCUMENT_BYTES
MAX_LOADED_DOCUMENTS = int(os.getenv("MAX_LOADED_DOCUMENTS", "20"))  # oldest evicted first

# Highlighting Configuration
# When true the search box is compiled as a regular expression instead of a literal
SEARCH_TERM_AS_REGEX = os.getenv("SEARCH_TERM_AS_REGEX", "false").lower() in ("1", "true", "yes")

# Logging Configuration
if LOG_FORMAT != "json":
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
