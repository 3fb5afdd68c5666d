"""FastAPI server for the compliance decision API.

Routes:
- /health, /               (health)
- /api/evaluate            (evaluate)
- /api/users, /api/apps    (records)
- /api/policy              (policy)
- /api/cache               (cache)
"""

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from privacy_guard import __version__
from privacy_guard.service import PrivacyGuardService

from .routes import apps, cache, evaluate, health, policy, users

CORS_ORIGINS_ENV_VAR = "PRIVACY_GUARD_CORS_ORIGINS"


def create_api_app(service: PrivacyGuardService | None = None) -> FastAPI:
    """Create the FastAPI application with all routes.

    Args:
        service: Service stored on app.state.service. Routes answer 503
            until one is set.
    """
    app = FastAPI(
        title="Privacy Guard API",
        description="Privacy compliance decisions for apps and users",
        version=__version__,
    )
    app.state.service = service

    # Comma-separated list; defaults to local development frontends
    cors_origins = os.environ.get(
        CORS_ORIGINS_ENV_VAR,
        "http://localhost:3000,http://127.0.0.1:3000",
    ).split(",")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin.strip() for origin in cors_origins],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=3600,
    )

    app.include_router(health.router, tags=["health"])
    app.include_router(evaluate.router, prefix="/api/evaluate", tags=["evaluate"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(apps.router, prefix="/api/apps", tags=["apps"])
    app.include_router(policy.router, prefix="/api/policy", tags=["policy"])
    app.include_router(cache.router, prefix="/api/cache", tags=["cache"])

    return app
