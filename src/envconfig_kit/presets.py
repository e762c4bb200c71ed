"""Ready-made schemas for common services.

Each factory takes a key prefix and returns a fresh schema dict that can be
merged with others::

    schema = {**presets.server(), **presets.database()}
"""

from typing import Dict

from .schema import (
    ArrayField, BaseField, BooleanField, EmailField, EnumField, IntegerField,
    PortField, StringField, UrlField,
)

ENVIRONMENTS = ("development", "staging", "production", "test")


def server(prefix: str = "") -> Dict[str, BaseField]:
    return {
        f"{prefix}PORT": PortField(default=3000),
        f"{prefix}HOST": StringField(default="localhost"),
        f"{prefix}APP_ENV": EnumField(values=ENVIRONMENTS, default="development"),
    }


def database(prefix: str = "DATABASE_") -> Dict[str, BaseField]:
    return {
        f"{prefix}URL": UrlField(),
        f"{prefix}HOST": StringField(default="localhost", optional=True),
        f"{prefix}PORT": PortField(default=5432, optional=True),
        f"{prefix}NAME": StringField(optional=True),
        f"{prefix}USER": StringField(optional=True),
        f"{prefix}PASSWORD": StringField(secret=True, optional=True),
        f"{prefix}SSL": BooleanField(default=False, optional=True),
    }


def redis(prefix: str = "REDIS_") -> Dict[str, BaseField]:
    return {
        f"{prefix}URL": UrlField(optional=True),
        f"{prefix}HOST": StringField(default="localhost", optional=True),
        f"{prefix}PORT": PortField(default=6379, optional=True),
        f"{prefix}PASSWORD": StringField(secret=True, optional=True),
        f"{prefix}DB": IntegerField(default=0, optional=True),
        f"{prefix}TLS": BooleanField(default=False, optional=True),
    }


def auth(prefix: str = "AUTH_") -> Dict[str, BaseField]:
    return {
        f"{prefix}JWT_SECRET": StringField(secret=True),
        f"{prefix}JWT_EXPIRES_IN": StringField(default="1d", optional=True),
        f"{prefix}BCRYPT_ROUNDS": IntegerField(default=10, optional=True),
    }


def aws(prefix: str = "AWS_") -> Dict[str, BaseField]:
    return {
        f"{prefix}ACCESS_KEY_ID": StringField(secret=True),
        f"{prefix}SECRET_ACCESS_KEY": StringField(secret=True),
        f"{prefix}REGION": StringField(default="us-east-1"),
        f"{prefix}S3_BUCKET": StringField(optional=True),
    }


def smtp(prefix: str = "SMTP_") -> Dict[str, BaseField]:
    return {
        f"{prefix}HOST": StringField(),
        f"{prefix}PORT": PortField(default=587),
        f"{prefix}USER": StringField(optional=True),
        f"{prefix}PASSWORD": StringField(secret=True, optional=True),
        f"{prefix}FROM": EmailField(optional=True),
        f"{prefix}SECURE": BooleanField(default=False, optional=True),
    }


def cors(prefix: str = "CORS_") -> Dict[str, BaseField]:
    return {
        f"{prefix}ORIGINS": ArrayField(default=["http://localhost:3000"], optional=True),
        f"{prefix}METHODS": ArrayField(default=["GET", "POST", "PUT", "DELETE"], optional=True),
        f"{prefix}CREDENTIALS": BooleanField(default=True, optional=True),
    }


PRESETS = {
    "server": server,
    "database": database,
    "redis": redis,
    "auth": auth,
    "aws": aws,
    "smtp": smtp,
    "cors": cors,
}
