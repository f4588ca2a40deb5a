# Entry point: load .env, configure logging and run the Flask server
import logging

from dotenv import load_dotenv

# variables from .env must be in the environment before settings are built
load_dotenv()

from config import settings  # noqa: E402
from signature_api import create_app  # noqa: E402

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app(settings)

if __name__ == '__main__':
    app.run(host=settings.HOST, port=settings.PORT, debug=settings.FLASK_ENV == "development")
