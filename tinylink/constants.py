import string
from enum import StrEnum


# Short code alphabet: 26 uppercase + 26 lowercase + 10 digits
SHORTCODE_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits

# Submitter recorded when the client doesn't name one
ANONYMOUS_SUBMITTER = 'anon'

# DynamoDB global secondary index keyed by submitter
SUBMITTER_INDEX = 'SubmitterIndex'


class Defaults:
    """Default values for service settings."""

    SHORTCODE_LENGTH = 4
    MAX_CREATE_ATTEMPTS = 5
    FALLBACK_URL = 'https://home.verytiny.link'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class Links(StrEnum):
        SHORTCODE_LENGTH = 'SHORTCODE_LENGTH'
        MAX_CREATE_ATTEMPTS = 'MAX_CREATE_ATTEMPTS'
        FALLBACK_URL = 'FALLBACK_URL'
        LINK_TTL_SECONDS = 'LINK_TTL_SECONDS'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
