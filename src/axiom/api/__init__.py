"""
Axiom API Layer

FastAPI interface.
"""

from axiom.api.routes import create_app, router

__all__ = ["create_app", "router"]
