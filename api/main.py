from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core import db, errors, log, settings
from events import router as events_router
from funnels import router as funnels_router
from professions import router as professions_router


@asynccontextmanager
async def lifespan(_: FastAPI):
    log.configure_logging()
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="Event Intelligence API", lifespan=lifespan)

# Allow the dashboard frontend to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

errors.install(app)

app.include_router(events_router.router, tags=["events"])
app.include_router(professions_router.router, tags=["professions"])
app.include_router(funnels_router.router, tags=["funnels"])


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}
