from tasklist.web.routers.auth import router as auth_router
from tasklist.web.routers.profile import router as profile_router
from tasklist.web.routers.tasks import router as tasks_router

__all__ = [
    "auth_router",
    "profile_router",
    "tasks_router",
]
