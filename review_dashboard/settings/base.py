import os, re, logging
from datetime import timedelta
from logging import handlers
from pathlib import Path
from urllib.parse import urlparse

from dotenv import load_dotenv
from sqlalchemy.engine import make_url

load_dotenv()


class ConfigError(Exception):
    pass


def getenv_typed(name, cast, default=None):
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return cast(raw)
    except Exception as e:
        raise ConfigError(f"Env var {name} invalid: {e}")


_DURATION_RE = re.compile(r'^\s*(\d+)\s*([dhms]?)\s*$')
_DURATION_UNITS = {'d': 'days', 'h': 'hours', 'm': 'minutes', 's': 'seconds', '': 'seconds'}


def parse_duration(value) -> timedelta:
    """Converte '7d', '12h', '30m', '45s' ou segundos puros em timedelta."""
    if isinstance(value, timedelta):
        return value
    match = _DURATION_RE.match(str(value))
    if not match:
        raise ConfigError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


def ensure_sqlite_dir(uri: str) -> None:
    """Cria a pasta do arquivo SQLite (caminho absoluto) quando ainda não existe."""
    url = make_url(uri)
    if url.get_backend_name() != 'sqlite' or not url.database or url.database == ':memory:':
        return
    db_path = Path(url.database)
    if db_path.is_absolute():
        db_path.parent.mkdir(parents=True, exist_ok=True)


class BaseConfig:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key')
    DEBUG = False
    TESTING = False

    # Pasta 'instance' na raiz do projeto (banco SQLite local)
    INSTANCE_PATH = Path(__file__).parent.parent.parent / 'instance'
    INSTANCE_PATH.mkdir(parents=True, exist_ok=True)

    _db_url = os.getenv('DATABASE_URL')
    if _db_url and _db_url.startswith('postgres://'):
        _db_url = 'postgresql://' + _db_url[len('postgres://'):]
    if not _db_url:
        _db_url = f"sqlite:///{INSTANCE_PATH / 'reviews.sqlite'}"
    SQLALCHEMY_DATABASE_URI = _db_url
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Bearer tokens
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY') or SECRET_KEY
    JWT_ALGORITHM = os.getenv('JWT_ALGORITHM', 'HS256')
    JWT_EXPIRES_IN = parse_duration(os.getenv('JWT_EXPIRES_IN', '7d'))

    CORS_ORIGINS = [o.strip() for o in os.getenv('CORS_ORIGINS', '*').split(',') if o.strip()]

    # Paginação da listagem de reviews
    PAGINATION_DEFAULT_PER_PAGE = getenv_typed('PAGINATION_DEFAULT_PER_PAGE', int, 10)
    PAGINATION_MAX_PER_PAGE = getenv_typed('PAGINATION_MAX_PER_PAGE', int, 100)

    # Analytics
    ATTENTION_RATING_THRESHOLD = getenv_typed('ATTENTION_RATING_THRESHOLD', float, 3)
    RECENT_REVIEWS_LIMIT = getenv_typed('RECENT_REVIEWS_LIMIT', int, 5)

    # Dashboard -> API. Quando ausente, o dashboard chama a API em processo.
    API_BASE_URL = os.getenv('API_BASE_URL')
    API_TIMEOUT = getenv_typed('API_TIMEOUT', float, 10.0)

    LOG_FILE = Path(os.getenv('LOG_FILE', 'logs/app.log'))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
    LOG_FORMAT = os.getenv('LOG_FORMAT', 'text').lower()

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = os.getenv('SESSION_COOKIE_SAMESITE', 'Lax')
    SESSION_COOKIE_SECURE = os.getenv('SESSION_COOKIE_SECURE', 'false').lower() == 'true'

    @classmethod
    def init_app(cls, app):
        from review_dashboard.utils.logging_config import StructuredFormatter

        level = getattr(logging, cls.LOG_LEVEL, logging.INFO)
        if cls.LOG_FORMAT == 'json':
            formatter = StructuredFormatter()
        else:
            formatter = logging.Formatter('%(asctime)s %(levelname)s [%(name)s] %(message)s')

        ensure_sqlite_dir(app.config['SQLALCHEMY_DATABASE_URI'])

        # logger do pacote: cobre app.logger e os loggers dos módulos
        package_logger = logging.getLogger('review_dashboard')
        package_logger.setLevel(level)
        if app.testing:
            return

        log_path = str(cls.LOG_FILE.resolve())
        if any(getattr(h, 'baseFilename', None) == log_path for h in package_logger.handlers):
            return
        cls.LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        fh = handlers.RotatingFileHandler(log_path, maxBytes=10_000_000, backupCount=5)
        fh.setLevel(level)
        fh.setFormatter(formatter)
        package_logger.addHandler(fh)

    @classmethod
    def validate(cls):
        if not cls.SECRET_KEY:
            raise ConfigError("SECRET_KEY must be set")
        scheme = urlparse(cls.SQLALCHEMY_DATABASE_URI).scheme
        if scheme and scheme.split('+')[0] not in ('sqlite', 'postgresql', 'mysql', 'oracle', 'mssql'):
            raise ConfigError(f"Unsupported DB scheme {scheme}")
        if cls.PAGINATION_DEFAULT_PER_PAGE < 1 or cls.PAGINATION_MAX_PER_PAGE < cls.PAGINATION_DEFAULT_PER_PAGE:
            raise ConfigError("Invalid pagination limits")
