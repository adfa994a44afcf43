from app.routers.analyses import router as analyses_router

__all__ = ["analyses_router"]
