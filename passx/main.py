from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from passx.api.password_routes import router as password_router
from passx.core.config import settings
from passx.core.logging_config import setup_logging
from passx.db.database import close_db, init_db
from passx.exception_handlers import setup_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging()
    await init_db()
    yield
    # Shutdown
    await close_db()


app = FastAPI(
    title="PassX API",
    description="Password management: reset by email code, change, hashing",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)

# Include routers
app.include_router(password_router, prefix="/api/users", tags=["Password"])


@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "service": "PassX API"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "passx.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
