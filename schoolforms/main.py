from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from schoolforms.actions import FormRegistry, default_registry
from schoolforms.config import settings
from schoolforms.routers import forms


def create_app(registry: Optional[FormRegistry] = None) -> FastAPI:
    app = FastAPI(title=settings.APP_NAME)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SECRET_KEY,
        same_site=settings.SESSION_COOKIE_SAMESITE,
        https_only=settings.SESSION_COOKIE_SECURE,
    )

    # Hosts register their persistence actions / loaders / reference providers here
    app.state.forms = registry if registry is not None else default_registry()

    app.include_router(forms.router)
    return app


app = create_app()
