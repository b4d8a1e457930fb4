from importlib import import_module
from pathlib import Path

import structlog
from fastapi import FastAPI

from .settings import get_settings

logger = structlog.get_logger()

app = FastAPI(title="vaer")


def load_apps(path: Path) -> None:
    for api_module in path.glob("*/api.py"):

        # Construct the name of the module
        relative_path = api_module.relative_to(Path(__file__).parent)
        module_path = ".".join(p.name for p in reversed(relative_path.parents))
        module_name = f"{module_path}.{api_module.stem}"

        # Register the module
        module = import_module(module_name, package="vaer")
        if router := getattr(module, "router", None):
            app.include_router(router)


load_apps(Path(__file__).parent)


@app.on_event("startup")
async def startup() -> None:
    # Fail early on missing configuration
    settings = get_settings()
    logger.info("Starting", base_url=settings.base_url, units=settings.units)


@app.get("/health")
async def get_health() -> dict:
    return {"status": "pass"}
