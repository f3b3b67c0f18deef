from .health import router as health_router
from .load import router as load_router
from .chaos import router as chaos_router
from .info import router as info_router

__all__ = ["health_router", "load_router", "chaos_router", "info_router"]
