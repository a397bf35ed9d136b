"""
Run the User Record Store with uvicorn: python main.py
"""

import logging
import os
import sys

import uvicorn
from dotenv import load_dotenv

load_dotenv()
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

from record_store.app import app  # noqa: E402
from record_store.config.settings import HOST, PORT  # noqa: E402

logger = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    logger.info(f"Starting User Record Store on {HOST}:{PORT}")
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    main()
