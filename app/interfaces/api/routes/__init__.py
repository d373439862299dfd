from fastapi import FastAPI

from app.interfaces.web.routes import router as web_router

from .documents import router as documents_router


def register_routes(app: FastAPI) -> None:
    """Register every API router and the client page on the FastAPI application."""

    app.include_router(documents_router)
    app.include_router(web_router)
