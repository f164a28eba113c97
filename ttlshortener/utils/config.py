"""Utility functions for application configuration management.

This module provides a standardized interface for Lambda functions to access
configuration data stored in **AWS AppConfig**. Each environment (`APP_ENV`) has
a dedicated AppConfig *Environment* within the shared AppConfig *Application*
identified by `APP_NAME`. Configuration data is stored as a JSON document under
a configuration profile and deployed to the corresponding environment.

The configuration JSON follows this structure:

    {
        "active_backend": "redis",
        "configs": {
            "shorten_url": {
                "redis": {"host": "...", "port": 6379, "db": 0, "socket_timeout": 2.0}
            },
            "redirect_url": {
                "redis": { ... }
            },
            "delete_url": {
                "redis": { ... }
            }
        }
    }

Each Lambda loads its own section (e.g., `"shorten_url"`) from this AppConfig
document. When running locally (SAM, tests, scripts) the section is instead
built from local environment variables, see `_load_local_config()`.

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`), `'local'` by default.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    project_root() -> Path
        Return the absolute path to the project root directory.

    link_ttl() -> int
        Return the short URL TTL in seconds (`LINK_TTL_SECONDS`, 3 hours by default).

    load_config(lambda_name: str) -> dict
        Load configuration for a given Lambda and return `{backend: section}`.

Example:
    Typical usage inside a Lambda handler:

        >>> from ttlshortener.utils.config import load_config
        >>> config = load_config('shorten_url')
        >>> print(config['redis']['host'])
        redis-15501.host.docker.internal
"""

import os
import json
import logging
import functools
from pathlib import Path
from collections.abc import Callable

import boto3

from ttlshortener.types import LambdaConfiguration
from ttlshortener.constants import ENV, TTL
from ttlshortener.exceptions import BadConfigurationError
from ttlshortener.utils.helpers import require_environment
from ttlshortener.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def project_root() -> Path:
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, os.path.dirname(__file__)))


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'ttlshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'ttlshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def link_ttl() -> int:
    """Return the short URL time-to-live in seconds

    Raises:
        BadConfigurationError:
            If LINK_TTL_SECONDS is not a positive integer.

    Example:
        >>> os.environ['LINK_TTL_SECONDS'] = '600'
        >>> link_ttl()
        600
    """
    raw = os.environ.get(ENV.App.LINK_TTL_SECONDS)
    if not raw:
        return TTL.THREE_HOURS

    try:
        ttl = int(raw)
    except ValueError as e:
        raise BadConfigurationError(f"{ENV.App.LINK_TTL_SECONDS} must be an integer (given value: '{raw}').") from e
    if ttl <= 0:
        raise BadConfigurationError(f'{ENV.App.LINK_TTL_SECONDS} must be positive (given value: {ttl}).')
    return ttl


def _load_local_config(func: Callable) -> Callable:
    """Decorator: build the Lambda's config from local environment variables

    Behavior:
        - If the application is running locally, return a config section
          assembled from LOCAL_BACKEND and REDIS_* environment variables.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Environment variables used:
        LOCAL_BACKEND   – "redis" (default) or "memory".
        REDIS_HOST      – default "localhost".
        REDIS_PORT      – default 6379.
        REDIS_DB        – default 0.
        REDIS_USERNAME  – optional.
        REDIS_PASSWORD  – optional.

    Example:
        >>> os.environ['APP_ENV'] = 'local'
        >>> os.environ['LOCAL_BACKEND'] = 'memory'
        >>> load_config('shorten_url')
        {'memory': {}}
    """

    @functools.wraps(func)
    def wrapper(lambda_name: str, *args, **kwargs) -> LambdaConfiguration:
        if not running_locally():
            return func(lambda_name, *args, **kwargs)

        backend = os.environ.get(ENV.Local.BACKEND, 'redis').lower()
        if backend == 'memory':
            data = {'memory': {}}
        elif backend == 'redis':
            section = {
                'host': os.environ.get(ENV.Local.REDIS_HOST, 'localhost'),
                'port': int(os.environ.get(ENV.Local.REDIS_PORT, 6379)),
                'db': int(os.environ.get(ENV.Local.REDIS_DB, 0)),
            }
            for key, name in (('username', ENV.Local.REDIS_USERNAME), ('password', ENV.Local.REDIS_PASSWORD)):
                if os.environ.get(name):
                    section[key] = os.environ[name]
            data = {'redis': section}
        else:
            raise BadConfigurationError(f"Unsupported {ENV.Local.BACKEND} '{backend}' (expected 'redis' or 'memory').")

        logger.debug('Loaded config from local environment.', extra={'lambdaName': lambda_name, 'backend': backend})
        return data

    return wrapper


@_load_local_config
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(lambda_name: str) -> LambdaConfiguration:
    """Load configuration for a given Lambda from AWS AppConfig

    Fetches the AppConfig JSON once and returns the section relevant
    to the requested Lambda function (e.g., 'shorten_url', 'redirect_url').

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Args:
        lambda_name (str):
            Name of the Lambda (e.g., "shorten_url" or "redirect_url").

    Returns:
        dict: The lambda's active backend config section, `{backend: section}`.

    Raises:
        MissingEnvironmentVariableError:
            If any AppConfig identifier is not set.
        BadConfigurationError:
            If the document has no section for this Lambda and its active backend.
        botocore.exceptions.ClientError:
            If AppConfig rejects the request.

    Example:
        >>> app_config = load_config('shorten_url')
        >>> app_config['redis']['host']
        'redis-15501.host.docker.internal'
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    appconfig = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    config = json.loads(content.decode('utf-8'))

    # Extract the active backend config for this lambda
    try:
        backend = config['active_backend']
        data = {backend: config['configs'][lambda_name][backend]}
    except KeyError as e:
        raise BadConfigurationError(f"AppConfig document has no '{lambda_name}' config for the active backend.") from e

    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': config.get('build')})
    return data
