"""
Configuration settings for the record browser
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Base URL of the record store the browser talks to
RECORD_STORE_URL = os.getenv("RECORD_STORE_URL", "http://localhost:5001")
