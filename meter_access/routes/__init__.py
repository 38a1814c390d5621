from .actions import router as actions_router
from .pages import router as pages_router

__all__ = ["actions_router", "pages_router"]
