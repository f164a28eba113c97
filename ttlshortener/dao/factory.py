"""Select the short URL DAO matching a Lambda's config section

Example:
    >>> build_short_url_dao({'redis': {'host': 'localhost', 'port': 6379}}, prefix='app:dev')
    <ShortURLRedisDAO>
    >>> build_short_url_dao({'memory': {}})
    <ShortURLMemoryDAO>
"""

from ttlshortener.types import LambdaConfiguration
from ttlshortener.exceptions import BadConfigurationError
from ttlshortener.dao.base import ShortURLBaseDAO
from ttlshortener.dao.redis import ShortURLRedisDAO
from ttlshortener.dao.memory import ShortURLMemoryDAO
from ttlshortener.utils.config import link_ttl


# The in-memory store lives as long as the Lambda container does
_memory_dao: ShortURLMemoryDAO | None = None


def build_short_url_dao(app_config: LambdaConfiguration, prefix: str | None = None) -> ShortURLBaseDAO:
    """Build a ShortURLBaseDAO for the backend named in `app_config`

    An optional `ttl` key in the backend section overrides `link_ttl()`.

    Raises:
        BadConfigurationError:
            If the config names no supported backend.
        DataStoreError:
            If the Redis healthcheck fails.
    """
    global _memory_dao

    if 'redis' in app_config:
        section = dict(app_config['redis'])
        ttl = section.pop('ttl', None) or link_ttl()
        redis_config = {f'redis_{k}': v for k, v in section.items()}
        return ShortURLRedisDAO(**redis_config, prefix=prefix, ttl=ttl)

    if 'memory' in app_config:
        ttl = (app_config['memory'] or {}).get('ttl') or link_ttl()
        if _memory_dao is None or _memory_dao.ttl != ttl:
            _memory_dao = ShortURLMemoryDAO(ttl=ttl)
        return _memory_dao

    raise BadConfigurationError(f'No supported data store backend in config (given keys: {sorted(app_config)}).')
