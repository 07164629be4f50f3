from config.config import settings, Settings

__all__ = ["settings", "Settings"]
