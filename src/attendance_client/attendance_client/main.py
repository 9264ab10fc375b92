from __future__ import annotations

import importlib
from typing import Optional

import httpx
from dotenv import load_dotenv

from config import get_settings_module

from .app_logger import setup_logging
from .container import Container, build_container


def create_client(
    *,
    token: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Container:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    api_config = getattr(settings, "API_CONFIG")
    debug = bool(getattr(settings, "DEBUG", False))

    logger = setup_logging(getattr(settings, "LOG_LEVEL", "DEBUG" if debug else "INFO"))
    logger.info("settings=%s api=%s", settings_module, api_config.get("base_url"))

    container = build_container(api_config=api_config, token=token, transport=transport)
    if not container.api.is_authenticated:
        logger.warning("No bearer token given; only unauthenticated endpoints will succeed")
    return container
