import uvicorn

from app.core.app_factory import create_app
from app.core.config import settings

app = create_app()


def run() -> None:
    """Serve the app with uvicorn on ``PORT`` (default 3000)."""
    uvicorn.run(app, host=settings.app.host, port=settings.app.port, log_config=None)


if __name__ == "__main__":
    run()
