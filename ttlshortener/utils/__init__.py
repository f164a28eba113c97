from ttlshortener.utils.config import app_env, app_name, project_root, app_prefix, link_ttl, load_config
from ttlshortener.utils.helpers import base_url, get_short_url, validate_target_url, require_environment, guarantee_500_response
from ttlshortener.utils.runtime import running_locally, request_deadline
from ttlshortener.utils.shortener import generate_shortcode, validate_shortcode
from ttlshortener.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'validate_shortcode',
    'app_env',
    'app_name',
    'app_prefix',
    'project_root',
    'link_ttl',
    'load_config',
    'base_url',
    'get_short_url',
    'validate_target_url',
    'require_environment',
    'guarantee_500_response',
    'running_locally',
    'request_deadline',
    'initialize_logging',
]
