from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from app.config import settings
from app.database import engine, Base, SessionLocal
from app.errors import register_exception_handlers
from app.users.routers import auth_router, router as user_router
from app.categories.router import router as category_router
from app.categories.seed import seed_default_categories
from app.expenses.router import router as expenses_router
from app.dashboard.router import router as dashboard_router


if settings.LOG_FILE:
    logger.add(settings.LOG_FILE, rotation="500 MB", level=settings.LOG_LEVEL)


# Database startup
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup")
    Base.metadata.create_all(bind=engine)
    if settings.SEED_DEFAULT_CATEGORIES:
        with SessionLocal() as db:
            seed_default_categories(db)
    yield
    logger.info("Application shutdown")


# Create app
app = FastAPI(
    title="EXPENSE TRACKER",
    description="An API for tracking personal expenses by category.",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


# Routers
app.include_router(auth_router, prefix="/auth", tags=["Auth"])
app.include_router(user_router, prefix="/user", tags=["User"])
app.include_router(category_router, prefix="/categories", tags=["Categories"])
app.include_router(expenses_router, prefix="/expenses", tags=["Expenses"])
app.include_router(dashboard_router, prefix="/dashboard", tags=["Dashboard"])


@app.get("/health")
def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8000)
