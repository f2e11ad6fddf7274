import logging

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from logging_config import setup_logging
from routes import exchange_routes, object_routes, user_routes

setup_logging(settings.log_level, settings.log_file or None)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.project_name, version=settings.api_version)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(user_routes)
app.include_router(object_routes)
app.include_router(exchange_routes)

logger.info(
    "%s %s ready (strict transitions: %s)",
    settings.project_name, settings.api_version, settings.strict_transitions,
)


@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/docs")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000)
