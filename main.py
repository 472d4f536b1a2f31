"""
Entry point for the User Service
"""

import logging
from dotenv import load_dotenv

# Load environment variables from .env file before settings are read
load_dotenv()

from user_service.app import create_app
from user_service.config.settings import HOST, PORT, LOG_LEVEL

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

app = create_app()

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting User Service on {HOST}:{PORT}")
    uvicorn.run(app, host=HOST, port=PORT)
