"""Entrypoints serving the HTTP API."""

import uvicorn
from fastapi import FastAPI

from goutcare.api.app import create_app
from goutcare.config import Settings
from goutcare.containers import build_container


def create_default_app() -> FastAPI:
    """App factory for ``uvicorn --factory goutcare.main:create_default_app``."""
    return create_app(build_container())


def main(settings: Settings | None = None) -> None:
    """Run the API server with the default wiring."""
    resolved_settings = settings or Settings()
    app = create_app(build_container(resolved_settings))
    uvicorn.run(
        app,
        host=resolved_settings.api_host,
        port=resolved_settings.api_port,
        log_level=resolved_settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
