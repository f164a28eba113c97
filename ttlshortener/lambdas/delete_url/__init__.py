from ttlshortener.utils.logging import initialize_logging


initialize_logging()
