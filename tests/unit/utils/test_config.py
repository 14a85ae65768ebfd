"""Unit tests for configuration utilities in config.py."""

import json
from io import BytesIO
from typing import cast
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError
from pytest import MonkeyPatch

from tinylink.types import AppConfig
from tinylink.utils import config
from tinylink.utils.config import Settings, load_settings
from tinylink.constants import ENV, Defaults
from tinylink.exceptions import AppConfigError, BadConfigurationError, MissingEnvironmentVariableError


class TestLoadConfig:
    appconfig_payload: AppConfig
    appconfig_client: MagicMock

    @pytest.fixture
    def appconfig_payload(self) -> AppConfig:
        # fmt: off
        return cast(AppConfig, {
            'build': 42,
            'active_backend': 'dynamodb',
            'configs': {
                'links': {
                    'dynamodb': {'table_name': 'VeryTinyUrls'},
                    'redis': {'host': 'redis.test', 'port': 6379, 'db': 0},
                }
            },
        })
        # fmt: on

    @pytest.fixture
    def appconfig_client(self, appconfig_payload: AppConfig) -> MagicMock:
        client = MagicMock()
        client.start_configuration_session.return_value = {'InitialConfigurationToken': 'token123'}
        client.get_latest_configuration.return_value = {
            'Configuration': BytesIO(json.dumps(appconfig_payload).encode('utf-8')),
        }
        return client

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, appconfig_payload: AppConfig, appconfig_client: MagicMock) -> None:
        monkeypatch.setenv(ENV.App.APP_ENV, 'dev')
        monkeypatch.delenv(ENV.App.AWS_SAM_LOCAL, raising=False)
        monkeypatch.delenv(ENV.AppConfig.AGENT_URL, raising=False)
        monkeypatch.setenv(ENV.AppConfig.APP_ID, 'app123')
        monkeypatch.setenv(ENV.AppConfig.ENV_ID, 'env123')
        monkeypatch.setenv(ENV.AppConfig.PROFILE_ID, 'prof123')
        monkeypatch.setattr(config.boto3, 'client', MagicMock(return_value=appconfig_client))

        self.appconfig_payload = appconfig_payload
        self.appconfig_client = appconfig_client

    def test_load_config_returns_active_backend_section(self) -> None:
        assert config.load_config('links') == {'dynamodb': {'table_name': 'VeryTinyUrls'}}

        config.boto3.client.assert_called_once_with('appconfigdata')
        self.appconfig_client.start_configuration_session.assert_called_once_with(
            ApplicationIdentifier='app123',
            EnvironmentIdentifier='env123',
            ConfigurationProfileIdentifier='prof123',
        )
        self.appconfig_client.get_latest_configuration.assert_called_once_with(ConfigurationToken='token123')

    def test_load_config_requires_appconfig_identifiers(self, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.delenv(ENV.AppConfig.PROFILE_ID)

        with pytest.raises(MissingEnvironmentVariableError, match="'APPCONFIG_PROFILE_ID'"):
            config.load_config('links')

    def test_load_config_wraps_aws_errors(self) -> None:
        self.appconfig_client.start_configuration_session.side_effect = ClientError(
            {'Error': {'Code': 'ResourceNotFoundException', 'Message': 'nope'}},
            'StartConfigurationSession',
        )

        with pytest.raises(AppConfigError, match="Can't load AppConfig for 'links'"):
            config.load_config('links')

    def test_load_config_rejects_unknown_lambda_section(self) -> None:
        with pytest.raises(AppConfigError, match="no active backend section for 'other'"):
            config.load_config('other')

    def test_load_config_rejects_non_json_document(self) -> None:
        self.appconfig_client.get_latest_configuration.return_value = {'Configuration': BytesIO(b'not json')}

        with pytest.raises(AppConfigError, match='non-JSON document'):
            config.load_config('links')

    def test_load_config_from_local_agent(self, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.setenv(ENV.App.APP_ENV, 'local')
        monkeypatch.setenv(ENV.App.APP_NAME, 'tinylink')
        monkeypatch.setenv(ENV.AppConfig.AGENT_URL, 'http://localhost:2772')

        payload = dict(self.appconfig_payload, active_backend='redis')
        urlopen = MagicMock(return_value=BytesIO(json.dumps(payload).encode('utf-8')))
        monkeypatch.setattr(config.urllib.request, 'urlopen', urlopen)

        assert config.load_config('links') == {'redis': {'host': 'redis.test', 'port': 6379, 'db': 0}}
        urlopen.assert_called_once_with(
            'http://localhost:2772/applications/tinylink/environments/local/configurations/backend-config',
            timeout=5,
        )
        config.boto3.client.assert_not_called()

    def test_load_config_rejects_remote_agent_url(self, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.setenv(ENV.App.APP_ENV, 'local')
        monkeypatch.setenv(ENV.AppConfig.AGENT_URL, 'http://evil.example.com:2772')

        with pytest.raises(BadConfigurationError, match='Bad host'):
            config.load_config('links')


@pytest.mark.parametrize(
    'app_name, app_env, expected',
    [
        ('tinylink', 'dev', 'tinylink:dev'),
        ('tinylink', 'PROD', 'tinylink:prod'),
        (None, 'dev', None),
    ],
)
def test_app_prefix(monkeypatch: MonkeyPatch, app_name: str | None, app_env: str, expected: str | None) -> None:
    if app_name is None:
        monkeypatch.delenv(ENV.App.APP_NAME, raising=False)
    else:
        monkeypatch.setenv(ENV.App.APP_NAME, app_name)
    monkeypatch.setenv(ENV.App.APP_ENV, app_env)

    assert config.app_prefix() == expected


class TestLoadSettings:
    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch) -> None:
        for name in ENV.Links:
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self) -> None:
        settings = load_settings()

        assert settings == Settings()
        assert settings.shortcode_length == Defaults.SHORTCODE_LENGTH == 4
        assert settings.max_create_attempts == Defaults.MAX_CREATE_ATTEMPTS == 5
        assert settings.fallback_url == Defaults.FALLBACK_URL
        assert settings.link_ttl_seconds is None

    def test_reads_environment(self, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.setenv(ENV.Links.SHORTCODE_LENGTH, '6')
        monkeypatch.setenv(ENV.Links.MAX_CREATE_ATTEMPTS, '3')
        monkeypatch.setenv(ENV.Links.FALLBACK_URL, 'https://home.example.com')
        monkeypatch.setenv(ENV.Links.LINK_TTL_SECONDS, '86400')

        assert load_settings() == Settings(
            shortcode_length=6,
            max_create_attempts=3,
            fallback_url='https://home.example.com',
            link_ttl_seconds=86400,
        )

    def test_blank_values_fall_back_to_defaults(self, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.setenv(ENV.Links.SHORTCODE_LENGTH, ' ')
        monkeypatch.setenv(ENV.Links.FALLBACK_URL, '')

        assert load_settings() == Settings()

    @pytest.mark.parametrize(
        'name, value, message',
        [
            (ENV.Links.SHORTCODE_LENGTH, 'four', 'must be an integer'),
            (ENV.Links.SHORTCODE_LENGTH, '0', 'must be positive'),
            (ENV.Links.MAX_CREATE_ATTEMPTS, '-1', 'must be positive'),
            (ENV.Links.LINK_TTL_SECONDS, '1.5', 'must be an integer'),
        ],
    )
    def test_rejects_bad_values(self, monkeypatch: MonkeyPatch, name: str, value: str, message: str) -> None:
        monkeypatch.setenv(name, value)

        with pytest.raises(BadConfigurationError, match=message):
            load_settings()
