# admin_console/main.py

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from admin_console.config import settings
from admin_console.routers import analytics as analytics_router
from admin_console.routers import auth as auth_router
from admin_console.routers import compliance as compliance_router
from admin_console.routers import dashboard as dashboard_router
from admin_console.routers import photos as photos_router
from admin_console.routers import subscriptions as subscriptions_router
from admin_console.routers import users as users_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# ------------------------
# 1) app
# ------------------------
app = FastAPI(title="Admin Console API")

# ------------------------
# 2) CORS
#    - the console is a browser app on its own origin
#    - restrict CORS_ALLOW_ORIGINS outside local
# ------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=False,  # bearer tokens, no cookies
    allow_methods=["*"],
    allow_headers=["*"],
)

# ------------------------
# 3) routers, one per console page
# ------------------------
app.include_router(auth_router.router)
app.include_router(dashboard_router.router)
app.include_router(users_router.router)
app.include_router(photos_router.router)
app.include_router(subscriptions_router.router)
app.include_router(compliance_router.router)
app.include_router(analytics_router.router)


# ------------------------
# 4) health check
# ------------------------
@app.get("/")
def root():
    return {"ok": True, "env": settings.app_env}
