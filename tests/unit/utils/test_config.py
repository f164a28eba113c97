"""Unit tests for configuration utilities in config.py

Test coverage includes:

1. Environment variable resolution
   - Ensures app_env(), app_name(), app_prefix() correctly read environment variables.

2. Project root resolution
   - Ensures project_root() correctly reads PROJECT_ROOT from environment variables.

3. Link TTL resolution
   - Ensures link_ttl() defaults to three hours and validates LINK_TTL_SECONDS.

4. Configuration loading behavior
   - Ensures load_config() correctly returns parsed AppConfig configuration data.
   - Validates that AppConfig fetching is safely isolated via monkeypatching.
   - Ensures load_config() raises ClientError when AppConfig calls fail.
   - Ensures missing AppConfig identifiers or sections raise configuration errors.

5. Local configuration
   - Ensures local runs build the Redis or in-memory section from the environment.
"""

import os
import json
from io import BytesIO
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import botocore

from ttlshortener.utils import config
from ttlshortener.exceptions import BadConfigurationError, MissingEnvironmentVariableError


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    """Set up environment variables for testing."""
    monkeypatch.setenv('APPCONFIG_APP_ID', 'app123')
    monkeypatch.setenv('APPCONFIG_ENV_ID', 'env123')
    monkeypatch.setenv('APPCONFIG_PROFILE_ID', 'prof123')
    monkeypatch.setenv('APP_ENV', 'test')
    monkeypatch.delenv('AWS_SAM_LOCAL', raising=False)
    monkeypatch.delenv('LINK_TTL_SECONDS', raising=False)
    for name in ('LOCAL_BACKEND', 'REDIS_HOST', 'REDIS_PORT', 'REDIS_DB', 'REDIS_USERNAME', 'REDIS_PASSWORD'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def appconfig_payload():
    """Provide a default AppConfig payload used by multiple tests."""
    # fmt: off
    return {
        'build': 42,
        'active_backend': 'redis',
        'configs': {
            'test_lambda': {
                'redis': {
                    'host': 'monkey',
                    'port': 659595,
                    'db': 3
                }
            }
        },
    }
    # fmt: on


@pytest.fixture
def appconfig_client(monkeypatch, appconfig_payload):
    """Mock the AppConfig Data client returning `appconfig_payload`."""
    monkey_bytes = BytesIO(json.dumps(appconfig_payload).encode('utf-8'))
    mock_appconfig = MagicMock()
    mock_appconfig.start_configuration_session.return_value = {'InitialConfigurationToken': 'monkey_token'}
    mock_appconfig.get_latest_configuration.return_value = {'Configuration': monkey_bytes}
    monkeypatch.setattr(config.boto3, 'client', lambda service: mock_appconfig)
    return mock_appconfig


# -------------------------------
# 1. Environment variable resolution
# -------------------------------


def test_app_env(monkeypatch):
    """Ensure app_env() returns the correct environment value from APP_ENV"""
    monkeypatch.setitem(os.environ, 'APP_ENV', 'Test')
    assert config.app_env() == 'test'


def test_app_env_default(monkeypatch):
    monkeypatch.delitem(os.environ, 'APP_ENV', raising=False)
    assert config.app_env() == 'local'


def test_app_name(monkeypatch):
    """Ensure app_name() returns the correct environment value from APP_NAME"""
    monkeypatch.setitem(os.environ, 'APP_NAME', 'test-app')
    assert config.app_name() == 'test-app'


def test_app_name_not_set(monkeypatch):
    """Ensure app_name() returns None when APP_NAME is not set"""
    monkeypatch.delitem(os.environ, 'APP_NAME', raising=False)
    assert config.app_name() is None
    assert config.app_prefix() is None


def test_app_prefix(monkeypatch):
    """Ensure app_prefix() joins APP_NAME and APP_ENV"""
    monkeypatch.setitem(os.environ, 'APP_NAME', 'test-app')
    monkeypatch.setitem(os.environ, 'APP_ENV', 'test')
    assert config.app_prefix() == 'test-app:test'


# -------------------------------
# 2. Project root resolution
# -------------------------------


def test_project_root(monkeypatch):
    """Ensure project_root() returns the correct environment value from PROJECT_ROOT"""
    monkeypatch.setitem(os.environ, 'PROJECT_ROOT', '/monkey/path')
    assert config.project_root() == Path('/monkey/path')


# -------------------------------
# 3. Link TTL resolution
# -------------------------------


def test_link_ttl_default():
    assert config.link_ttl() == 10_800


def test_link_ttl_from_environment(monkeypatch):
    monkeypatch.setenv('LINK_TTL_SECONDS', '600')
    assert config.link_ttl() == 600


@pytest.mark.parametrize('raw, message', [('soon', 'must be an integer'), ('0', 'must be positive'), ('-60', 'must be positive')])
def test_link_ttl_invalid(monkeypatch, raw, message):
    monkeypatch.setenv('LINK_TTL_SECONDS', raw)
    with pytest.raises(BadConfigurationError, match=message):
        config.link_ttl()


# -------------------------------
# 4. Configuration loading behavior
# -------------------------------


def test_load_config(appconfig_client):
    """Ensure load_config() returns the active backend section for the Lambda."""
    result = config.load_config('test_lambda')

    assert result == {'redis': {'host': 'monkey', 'port': 659595, 'db': 3}}
    appconfig_client.start_configuration_session.assert_called_once_with(
        ApplicationIdentifier='app123',
        EnvironmentIdentifier='env123',
        ConfigurationProfileIdentifier='prof123',
    )
    appconfig_client.get_latest_configuration.assert_called_once_with(
        ConfigurationToken='monkey_token',
    )


def test_load_config_for_unknown_lambda(appconfig_client):
    with pytest.raises(BadConfigurationError, match="no 'other_lambda' config"):
        config.load_config('other_lambda')


def test_missing_appconfig_raises_error(monkeypatch):
    """Ensure load_config() propagates ClientError when AppConfig returns an error."""
    mock_appconfig = MagicMock()
    mock_appconfig.start_configuration_session.side_effect = botocore.exceptions.ClientError(
        {'Error': {'Code': 'ResourceNotFoundException'}}, 'StartConfigurationSession'
    )
    monkeypatch.setattr(config.boto3, 'client', lambda service: mock_appconfig)

    with pytest.raises(botocore.exceptions.ClientError):
        config.load_config('test_lambda')


def test_missing_appconfig_identifiers(monkeypatch, appconfig_client):
    monkeypatch.delenv('APPCONFIG_PROFILE_ID')

    with pytest.raises(MissingEnvironmentVariableError, match="'APPCONFIG_PROFILE_ID'"):
        config.load_config('test_lambda')

    appconfig_client.start_configuration_session.assert_not_called()


# -------------------------------
# 5. Local configuration
# -------------------------------


def test_local_config_defaults_to_redis(monkeypatch, appconfig_client):
    monkeypatch.setenv('APP_ENV', 'local')

    result = config.load_config('test_lambda')

    assert result == {'redis': {'host': 'localhost', 'port': 6379, 'db': 0}}
    appconfig_client.start_configuration_session.assert_not_called()


def test_local_config_from_environment(monkeypatch, appconfig_client):
    monkeypatch.setenv('AWS_SAM_LOCAL', 'true')
    monkeypatch.setenv('REDIS_HOST', 'host.docker.internal')
    monkeypatch.setenv('REDIS_PORT', '16379')
    monkeypatch.setenv('REDIS_DB', '2')
    monkeypatch.setenv('REDIS_USERNAME', 'default')
    monkeypatch.setenv('REDIS_PASSWORD', 'secret')

    result = config.load_config('test_lambda')

    assert result == {
        'redis': {'host': 'host.docker.internal', 'port': 16379, 'db': 2, 'username': 'default', 'password': 'secret'},
    }


def test_local_config_memory_backend(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'local')
    monkeypatch.setenv('LOCAL_BACKEND', 'Memory')

    assert config.load_config('test_lambda') == {'memory': {}}


def test_local_config_unknown_backend(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'local')
    monkeypatch.setenv('LOCAL_BACKEND', 'dynamodb')

    with pytest.raises(BadConfigurationError, match="Unsupported LOCAL_BACKEND 'dynamodb'"):
        config.load_config('test_lambda')
