"""
Initialize settings based on the environment.

Usage:
    from graphql_loader.core.init_settings import settings
"""
import os

from graphql_loader.core.config import get_settings

# Under pytest or uvicorn the mode always comes from APP_MODE
mode = os.getenv("APP_MODE", "dev")

settings = get_settings(mode)

__all__ = ["settings", "mode"]
