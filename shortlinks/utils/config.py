"""Utility functions and structures for application configuration.

Configuration is read once, at the edge of a Lambda invocation, and handed to
the DAOs and allocation components as an explicit `ShortLinksConfig` value.
Nothing below the Lambda handler reads the environment.

Configuration data is stored in **AWS AppConfig**. Each environment
(`APP_ENV`) has a dedicated AppConfig *Environment* within the shared
AppConfig *Application* identified by `APP_NAME`. The configuration JSON
follows this structure:

    {
        "build": 7,
        "active_backend": "redis",
        "configs": {
            "shorten_url": {
                "redis": {"host": "...", "port": 6379, "db": 0},
                "shortcode": {"length": 6, "max_attempts": 5},
                "short_url_base": "https://sho.rt"
            }
        }
    }

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`), `'local'` by default.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return the key prefix for DAOs, or None if `APP_NAME` is not set.

    load_config(lambda_name: str) -> dict
        Load the configuration section of a given Lambda from AWS AppConfig.

Classes:
    RedisConfig:
        Connection parameters of the Redis record store.

    ShortLinksConfig:
        Everything the allocation components need, built from a Lambda section.

Example:
    Typical usage inside a Lambda handler:

        >>> from shortlinks.utils.config import load_config, ShortLinksConfig, app_prefix
        >>> config = ShortLinksConfig.from_lambda_config(load_config('shorten_url'), prefix=app_prefix())
        >>> config.redis.host
        'redis-15501.host.docker.internal'
"""

import os
import json
import logging
from dataclasses import dataclass, field
from typing import Any

import boto3

from shortlinks.types import LambdaConfiguration
from shortlinks.constants import ENV, ShortCode
from shortlinks.exceptions import BadConfigurationError
from shortlinks.utils.helpers import require_environment


logger = logging.getLogger(__name__)


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'shortlinks'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'shortlinks:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(lambda_name: str) -> LambdaConfiguration:
    """Load configuration for a given Lambda from AWS AppConfig

    Fetches the AppConfig JSON once and returns the section relevant
    to the requested Lambda function (e.g. 'shorten_url').

    Environment variables required:
        APPCONFIG_APP_ID       - AppConfig Application ID
        APPCONFIG_ENV_ID       - AppConfig Environment ID
        APPCONFIG_PROFILE_ID   - AppConfig Configuration Profile ID

    Args:
        lambda_name (str):
            Name of the Lambda (e.g. "shorten_url").

    Returns:
        dict: The lambda's config section. The active backend's connection
              parameters live under the backend's name (e.g. 'redis').

    Raises:
        MissingEnvironmentVariableError:
            If an AppConfig identifier is missing from the environment.
        BadConfigurationError:
            If the document has no section for `lambda_name`.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    appconfig = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    config = json.loads(content.decode('utf-8'))

    try:
        backend = config['active_backend']
        section = config['configs'][lambda_name]
        data = {backend: section[backend]}
    except KeyError as e:
        raise BadConfigurationError(f"AppConfig document has no '{lambda_name}' section for the active backend.") from e

    for key in ('shortcode', 'short_url_base'):
        if key in section:
            data[key] = section[key]

    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': config.get('build')})
    return data


@dataclass(frozen=True)
class RedisConfig:
    host: str = 'localhost'
    port: int = 6379
    db: int = 0
    username: str | None = None
    password: str | None = None

    def as_dao_kwargs(self) -> dict[str, Any]:
        """Map onto the `redis_*` constructor arguments of RedisClientMixin."""
        return {
            'redis_host': self.host,
            'redis_port': self.port,
            'redis_db': self.db,
            'redis_username': self.username,
            'redis_password': self.password,
        }


@dataclass(frozen=True)
class ShortLinksConfig:
    """Explicit configuration handed to DAOs and allocation components.

    Attributes:
        redis (RedisConfig):
            Connection parameters of the record store.
        code_length (int):
            Number of characters per short code. Defaults to 6.
        max_attempts (int):
            Insert attempts per allocation before ExhaustedRetriesError. Defaults to 5.
        short_url_base (str | None):
            Public base of short URLs. Derived from the request when None.
        key_prefix (str | None):
            Namespace prefix for store keys, e.g. 'shortlinks:prod'.
    """

    redis: RedisConfig = field(default_factory=RedisConfig)
    code_length: int = ShortCode.LENGTH
    max_attempts: int = ShortCode.MAX_ATTEMPTS
    short_url_base: str | None = None
    key_prefix: str | None = None

    def __post_init__(self):
        for name in ('code_length', 'max_attempts'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise BadConfigurationError(f"'{name}' must be a positive integer (given value: {value!r}).")

    @classmethod
    def from_lambda_config(cls, lambda_config: LambdaConfiguration, prefix: str | None = None) -> 'ShortLinksConfig':
        """Build configuration from a Lambda section returned by load_config()

        Args:
            lambda_config (dict):
                Lambda section, e.g. {'redis': {...}, 'shortcode': {...}, 'short_url_base': '...'}.
            prefix (str | None):
                Namespace prefix for store keys (usually app_prefix()).

        Returns:
            ShortLinksConfig

        Raises:
            BadConfigurationError:
                If a value has the wrong type or is out of range.
        """
        redis_section = lambda_config.get('redis') or {}
        shortcode_section = lambda_config.get('shortcode') or {}
        try:
            redis_config = RedisConfig(
                host=redis_section.get('host', 'localhost'),
                port=int(redis_section.get('port', 6379)),
                db=int(redis_section.get('db', 0)),
                username=redis_section.get('username'),
                password=redis_section.get('password'),
            )
            code_length = int(shortcode_section.get('length', ShortCode.LENGTH))
            max_attempts = int(shortcode_section.get('max_attempts', ShortCode.MAX_ATTEMPTS))
        except (TypeError, ValueError) as e:
            raise BadConfigurationError(f'Invalid configuration value: {e}') from e

        return cls(
            redis=redis_config,
            code_length=code_length,
            max_attempts=max_attempts,
            short_url_base=lambda_config.get('short_url_base'),
            key_prefix=prefix,
        )
