"""Main FastAPI application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hms_console import __version__
from hms_console.api.endpoints import router
from hms_console.clients.registry import close_clients
from hms_console.utils.logging import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    yield
    await close_clients()


# Create FastAPI application
app = FastAPI(
    title="Hospital Management Console",
    description=(
        "Administration console over the hospital backends: patients, appointments, "
        "records, billing, pharmacy, laboratory, beds, staff, inventory, blood bank "
        "and notifications."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Pages",
            "description": (
                "Render console pages, run status-driven actions and submit create forms. "
                "Backend failures are reported with the backend's status and message."
            ),
        },
        {
            "name": "Health",
            "description": "Service health monitoring and status checks.",
        },
    ],
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(router)


def run() -> None:
    import uvicorn

    uvicorn.run("hms_console.main:app", host="0.0.0.0", port=8000, log_level="info")


if __name__ == "__main__":
    run()
