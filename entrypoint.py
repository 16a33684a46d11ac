"""Backend entrypoint. Starts uvicorn on the host/port from settings."""
import uvicorn

from tradesim.config.settings import get_settings
from tradesim.main import app


def main() -> None:
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
