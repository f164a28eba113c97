from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Short URL TTL duration, refreshed on every read (3 hours in seconds)
    THREE_HOURS = 10_800  # 60 * 60 * 3


# Collision retries when reserving a freshly generated shortcode
MAX_SHORTEN_ATTEMPTS = 3

# Safety margin subtracted from the Lambda's remaining time (milliseconds)
DEADLINE_MARGIN_MS = 100


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        PROJECT_ROOT = 'PROJECT_ROOT'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'
        LINK_TTL_SECONDS = 'LINK_TTL_SECONDS'
        BASE_URL = 'BASE_URL'
        CORS_ALLOW_ORIGIN = 'CORS_ALLOW_ORIGIN'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'

    class Local(StrEnum):
        # Backend used when running locally: "redis" (default) or "memory"
        BACKEND = 'LOCAL_BACKEND'
        REDIS_HOST = 'REDIS_HOST'
        REDIS_PORT = 'REDIS_PORT'
        REDIS_DB = 'REDIS_DB'
        REDIS_USERNAME = 'REDIS_USERNAME'
        REDIS_PASSWORD = 'REDIS_PASSWORD'  # noqa: S105


class ErrorCode(StrEnum):
    """Error and event codes attached to responses and log records."""

    UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
    INVALID_REQUEST_BODY = 'INVALID_REQUEST_BODY'
    INVALID_TARGET_URL = 'INVALID_TARGET_URL'
    INVALID_SHORTCODE = 'INVALID_SHORTCODE'
    SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
    SHORTCODE_EXHAUSTED = 'SHORTCODE_EXHAUSTED'
    RANDOMNESS_UNAVAILABLE = 'RANDOMNESS_UNAVAILABLE'
    DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
    DEADLINE_EXCEEDED = 'DEADLINE_EXCEEDED'
    SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
    REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
    DELETE_SUCCESS = 'DELETE_SUCCESS'
