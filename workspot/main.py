import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from workspot.config import CORS_ORIGINS, LOG_LEVEL
from workspot.database import create_db_and_tables
from workspot.routers import users
from workspot.routers import businesses
from workspot.routers import desks
from workspot.routers import business_hours
from workspot.routers import reservations

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    logger.info("Workspot API started")
    yield


app = FastAPI(title="Workspot", lifespan=lifespan)
app.include_router(users.router)
app.include_router(businesses.router)
app.include_router(desks.router)
app.include_router(business_hours.router)
app.include_router(reservations.router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root():
    return {"message": "Workspot API running"}
