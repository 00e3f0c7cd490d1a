# routes.py
from fastapi import FastAPI
from controller.entry_controller import entry_router


def register_routes(app: FastAPI) -> None:
    """Register & Access control controllers here."""
    app.include_router(entry_router)
