import string
from enum import StrEnum


class ShortCode:
    """Short code generation parameters."""

    # 26 uppercase + 26 lowercase + 10 digits
    ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
    LENGTH = 6
    # Insert attempts per allocation before giving up
    MAX_ATTEMPTS = 5


class RecordType(StrEnum):
    SHORT_LINKS = 'short_links'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'


# Short URL path template: <base>/r/<code>
SHORT_URL_PATH = 'r'

# Error codes
INVALID_JSON = 'INVALID_JSON'
MISSING_TARGET_URL = 'MISSING_TARGET_URL'
INVALID_TARGET_URL = 'INVALID_TARGET_URL'
STORE_UNAVAILABLE = 'STORE_UNAVAILABLE'
SHORTCODE_SPACE_EXHAUSTED = 'SHORTCODE_SPACE_EXHAUSTED'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
