from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from app.config.settings import DashboardConfig
from app.routers import dashboard

logging.basicConfig(
    level=DashboardConfig.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Task Dashboard API")

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=DashboardConfig.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Route registration
app.include_router(dashboard.router)

# Startup event
@app.on_event("startup")
async def startup_event():
    logger.info("Starting Task Dashboard API...")

# Root route
@app.get("/")
def read_root():
    return {"message": "Task Dashboard API"}

@app.get("/health")
def health():
    return {"status": "ok"}

if __name__ == "__main__":
    import uvicorn

    server = DashboardConfig.SERVER
    logger.info(f"Serving on {server['host']}:{server['port']} (reload={server['reload']})")
    uvicorn.run("main:app", host=server['host'], port=server['port'], reload=server['reload'], log_level="info")
