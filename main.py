"""
WanderAI – main application entry point

* Flask JSON API consumed by the single-page travel planner.
* Itineraries are assembled locally; Google Maps and the chat-completion
  provider are optional and degrade silently when unconfigured.
"""

import os
import logging

from dotenv import load_dotenv

# --------------------------------------------------------------------------- #
# Environment & logging
# --------------------------------------------------------------------------- #
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------- #
# Flask initialisation
# --------------------------------------------------------------------------- #
from wanderai.app import create_app  # noqa: E402
from wanderai.api.config import get_port, is_development  # noqa: E402

app = create_app()

# --------------------------------------------------------------------------- #
# Local development runner ( `python main.py` )
# --------------------------------------------------------------------------- #
if __name__ == "__main__":
    port = get_port()
    logger.info("Starting travel API on http://localhost:%d", port)
    app.run(host="0.0.0.0", port=port, debug=is_development(), threaded=True)

__all__ = ["app"]
