"""FastAPI application entrypoint. No business logic; only wiring."""

from dotenv import load_dotenv

load_dotenv()

from app.factory import create_app

app = create_app()
