from app.configs.settings import Settings, pool_kwargs, settings

__all__ = [
    "Settings",
    "pool_kwargs",
    "settings",
]
