from routes.signups import router as signup_router

__all__ = ["signup_router"]
