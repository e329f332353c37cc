from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from instagram.controllers import auth_controller, health_controller, user_controller
from instagram.core.config import settings
from instagram.core.dependencies import lifespan
from instagram.core.exception_handlers import setup_exception_handlers


def create_app() -> FastAPI:
    application = FastAPI(title="Instagram API", lifespan=lifespan)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Endpoints ---
    application.include_router(auth_controller.router)
    application.include_router(user_controller.router)
    application.include_router(health_controller.router)

    setup_exception_handlers(application)
    return application


app = create_app()
