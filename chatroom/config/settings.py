"""Application configuration settings"""

import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    # Runtime
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()
    TESTING = os.getenv("TESTING", "false").lower() in {"1", "true", "yes", "on"}
    DEBUG = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes", "on"}
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "8000"))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_PATH = os.getenv("LOG_PATH") or None
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
    )

    # CORS
    CORS_ALLOW_ORIGINS = os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")

    # Persistence: "memory" (process-local) or "prisma" (PostgreSQL)
    PERSISTENCE_BACKEND: str = os.getenv("PERSISTENCE_BACKEND", "memory").lower()
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")

    # Broadcast: "websocket" (in-process hub) or "redis" (pub/sub fan-out across workers)
    BROADCAST_BACKEND: str = os.getenv("BROADCAST_BACKEND", "websocket").lower()
    MESSAGE_UPDATE_EVENT = "messageUpdate"

    # Redis settings
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    REDIS_CHANNEL: str = os.getenv("REDIS_CHANNEL", "chatroom:events")


class DevelopmentConfig(Config):
    """Development configuration"""

    DEBUG = True


class TestingConfig(Config):
    """Testing configuration"""

    TESTING = True
    PERSISTENCE_BACKEND = "memory"
    BROADCAST_BACKEND = "websocket"


class ProductionConfig(Config):
    """Production configuration"""

    pass


# Configuration dictionary
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env=None):
    """Get configuration based on environment"""
    if env is None:
        env = os.getenv("ENVIRONMENT", "development")
    return config.get(env, config["default"])
