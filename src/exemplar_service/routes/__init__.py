from .comparisons import router as comparisons_router
from .criteria import router as criteria_router
from .generate import router as generate_router
from .health import router as health_router

__all__ = ["comparisons_router", "criteria_router", "generate_router", "health_router"]
