import logging
import os


class Config:
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Comma separated; "*" allows every origin
    CORS_ALLOW_ORIGINS = [o.strip() for o in os.environ.get('CORS_ALLOW_ORIGINS', '*').split(',') if o.strip()]
    # Leaderboard / search paging defaults
    DEFAULT_PAGE_LIMIT = int(os.environ.get('DEFAULT_PAGE_LIMIT', '10'))
    DEFAULT_SEARCH_LIMIT = int(os.environ.get('DEFAULT_SEARCH_LIMIT', '10'))
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '8000'))


def configure_logging(level: str = Config.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )
