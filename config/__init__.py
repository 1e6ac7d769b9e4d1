import os

SETTINGS_MODULES = {
    "production": "config.production",
    "prod": "config.production",
    "testing": "config.testing",
    "test": "config.testing",
}


def get_settings_module() -> str:
    # APP_ENV picks the settings module; anything unknown runs as development.
    env = os.getenv("APP_ENV", "development").strip().lower()
    return SETTINGS_MODULES.get(env, "config.development")
