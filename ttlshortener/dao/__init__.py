from ttlshortener.dao.base import ShortURLBaseDAO
from ttlshortener.dao.factory import build_short_url_dao


__all__ = ['ShortURLBaseDAO', 'build_short_url_dao']
