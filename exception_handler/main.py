"""Reference FastAPI host for the exception handler."""

from fastapi import FastAPI

from exception_handler.core.activation import configure_exception_handling
from exception_handler.core.config import HandlerSettings


def create_app(settings: HandlerSettings | None = None) -> FastAPI:
    """Build a host app with exception handling wired according to ``settings``."""
    app = FastAPI(title="Exception Handler")
    configure_exception_handling(app, settings)

    @app.get("/health")
    def health() -> dict[str, str]:
        """Health check stub endpoint for service readiness."""
        return {"status": "ok"}

    return app


app = create_app()
