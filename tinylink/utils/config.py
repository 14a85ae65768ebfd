"""Utility functions for application configuration management.

Configuration comes from two places:

1. **AWS AppConfig** holds the data store connection parameters. Each
   environment (`APP_ENV`) has a dedicated AppConfig *Environment* within the
   shared AppConfig *Application* identified by `APP_NAME`. The document
   follows this structure:

       {
           "build": 7,
           "active_backend": "dynamodb",
           "configs": {
               "links": {
                   "dynamodb": {"table_name": "VeryTinyUrls"},
                   "redis": {"host": "...", "port": 6379, "db": 0}
               }
           }
       }

   `load_config('links')` returns only the active backend's section, e.g.
   `{"dynamodb": {"table_name": "VeryTinyUrls"}}`.

2. **Environment variables** hold the service scalars (short code length,
   retry cap, fallback URL, link TTL), read into a frozen `Settings`.

Typical usage inside a Lambda handler:
    >>> from tinylink.utils.config import load_config, load_settings
    >>> load_config('links')
    {'dynamodb': {'table_name': 'VeryTinyUrls'}}
    >>> load_settings().shortcode_length
    4
"""

import os
import json
import functools
import urllib.error
import urllib.parse
import urllib.request
import logging
from dataclasses import dataclass
from collections.abc import Callable

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from tinylink.types import AppConfig, AppConfigDataClient, LambdaConfiguration
from tinylink.constants import ENV, Defaults
from tinylink.utils.helpers import require_environment
from tinylink.utils.runtime import running_locally
from tinylink.exceptions import AppConfigError, BadConfigurationError


logger = logging.getLogger(__name__)


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs as <app name>:<app env>, or None if APP_NAME is not set."""
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _active_backend_section(document: AppConfig, lambda_name: str) -> LambdaConfiguration:
    try:
        backend = document['active_backend']
        return {backend: document['configs'][lambda_name][backend]}
    except (KeyError, TypeError) as e:
        raise AppConfigError(f"AppConfig document has no active backend section for '{lambda_name}'.") from e


def _sam_load_local_appconfig(func: Callable) -> Callable:
    """Decorator: load AppConfig from a local AppConfig Agent when running under SAM.

    Behavior:
        - If the application is running locally and `APPCONFIG_AGENT_URL` is set
          to a safe local URL, fetch the app configuration JSON from the local
          AppConfig agent.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Environment variables used:
        APPCONFIG_AGENT_URL     : Base URL of the local AppConfig Agent (e.g., http://appconfig-agent:2772).
        APPCONFIG_PROFILE_NAME  : Optional profile name (default: "backend-config").
    """

    # ruff: noqa: E701
    def __validate_appconfig_url(url: str | None) -> str:
        if not url:
            return ''
        components = urllib.parse.urlparse(url)
        if components.scheme not in {'http', 'https'}:
            raise BadConfigurationError(f'Bad scheme {url}')
        if components.hostname not in {'localhost', '127.0.0.1', 'host.docker.internal', 'appconfig-agent'}:
            raise BadConfigurationError(f'Bad host {url}')
        if components.port not in {2772, None}:
            raise BadConfigurationError(f'Bad port {url}')
        return url

    # ruff: enable

    @functools.wraps(func)
    def wrapper(lambda_name: str) -> LambdaConfiguration:
        agent_url = __validate_appconfig_url(os.getenv(ENV.AppConfig.AGENT_URL))
        if not running_locally() or not agent_url:
            return func(lambda_name)

        profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, 'backend-config')
        url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

        logger.debug('Trying to load AppConfig from local agent.', extra={'agentUrl': url, 'lambdaName': lambda_name})
        try:
            with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
                document = json.load(r)
        except (urllib.error.URLError, json.JSONDecodeError) as e:
            raise AppConfigError(f"Can't load AppConfig from local agent at {agent_url}.") from e

        data = _active_backend_section(document, lambda_name)
        logger.debug('Loaded AppConfig from local agent.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
        return data

    return wrapper


@_sam_load_local_appconfig
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(lambda_name: str) -> LambdaConfiguration:
    """Load configuration for a given Lambda from AWS AppConfig.

    Fetches the AppConfig JSON once and returns the active backend's section
    for the requested Lambda function (e.g., 'links').

    Raises:
        MissingEnvironmentVariableError:
            If the AppConfig identifiers are not set.
        AppConfigError:
            If AppConfig can't be reached or the document is malformed.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    try:
        appconfig: AppConfigDataClient = boto3.client('appconfigdata')

        # Start an AppConfig data session
        session_token = appconfig.start_configuration_session(
            ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
            EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
            ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
        )['InitialConfigurationToken']

        # Fetch the configuration
        response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
        content = response['Configuration'].read()
    except (BotoCoreError, ClientError) as e:
        raise AppConfigError(f"Can't load AppConfig for '{lambda_name}'.") from e

    try:
        document = json.loads(content.decode('utf-8'))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise AppConfigError('AppConfig responded with a non-JSON document.') from e

    data = _active_backend_section(document, lambda_name)
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
    return data


@dataclass(frozen=True)
class Settings:
    """Service settings read from the environment.

    Attributes:
        shortcode_length (int):
            Number of characters in generated short codes.
        max_create_attempts (int):
            Conditional writes attempted before link creation gives up.
        fallback_url (str):
            Redirect target for unknown short codes, lookup failures and bare GETs.
        link_ttl_seconds (int | None):
            Lifetime stamped on new links. None keeps links indefinitely.
    """

    shortcode_length: int = Defaults.SHORTCODE_LENGTH
    max_create_attempts: int = Defaults.MAX_CREATE_ATTEMPTS
    fallback_url: str = Defaults.FALLBACK_URL
    link_ttl_seconds: int | None = None


def _positive_int(name: str, default: int | None) -> int | None:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise BadConfigurationError(f"Environment variable '{name}' must be an integer (given value: {raw!r}).") from e
    if value < 1:
        raise BadConfigurationError(f"Environment variable '{name}' must be positive (given value: {value}).")
    return value


def load_settings() -> Settings:
    """Read service settings from environment variables, applying defaults.

    Raises:
        BadConfigurationError:
            If a numeric setting isn't a positive integer.
    """
    return Settings(
        shortcode_length=_positive_int(ENV.Links.SHORTCODE_LENGTH, Defaults.SHORTCODE_LENGTH),
        max_create_attempts=_positive_int(ENV.Links.MAX_CREATE_ATTEMPTS, Defaults.MAX_CREATE_ATTEMPTS),
        fallback_url=os.environ.get(ENV.Links.FALLBACK_URL) or Defaults.FALLBACK_URL,
        link_ttl_seconds=_positive_int(ENV.Links.LINK_TTL_SECONDS, None),
    )
