import json
import logging

from botocore.exceptions import BotoCoreError, ClientError

from shortlinks.types import LambdaEvent, LambdaContext, LambdaResponse, HttpHeaders
from shortlinks.dao.redis import RecordStoreRedisDAO
from shortlinks.dao.exceptions import DataStoreError
from shortlinks.exceptions import ConfigurationError, ExhaustedRetriesError, InvalidInputError
from shortlinks.allocation import ShortLinkService
from shortlinks.utils import load_config, app_prefix, base_url, ShortLinksConfig
from shortlinks.constants import (
    INVALID_JSON,
    MISSING_TARGET_URL,
    INVALID_TARGET_URL,
    STORE_UNAVAILABLE,
    SHORTCODE_SPACE_EXHAUSTED,
    CONFIGURATION_ERROR,
    UNKNOWN_INTERNAL_SERVER_ERROR,
)


logger = logging.getLogger(__name__)

CORS_HEADERS: HttpHeaders = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Allow-Methods': 'OPTIONS,POST',
}


def _response(status_code: int, body: dict) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS},
        'body': json.dumps(body),
    }


def _error(status_code: int, message: str, error_code: str) -> LambdaResponse:
    return _response(status_code, {'message': message, 'errorCode': error_code})


def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Load the application's configuration
    - Step 2: Extract original URL from request body
    - Step 3: Return the existing short link of the URL, or allocate a new one
    - Step 4: Respond to user with 200 success

    HTTP responses:
        200: Successful URL shortening
            message: success message
            targetUrl: original url (provided in request)
            shortUrl: short url, <base>/r/<shortcode>
            shortcode: shortcode of the link
        400: Bad client request
            errorCode: INVALID_JSON, MISSING_TARGET_URL or INVALID_TARGET_URL
        500: Internal server error
            errorCode: CONFIGURATION_ERROR, SHORTCODE_SPACE_EXHAUSTED or UNKNOWN_INTERNAL_SERVER_ERROR
        503: Record store unavailable
            errorCode: STORE_UNAVAILABLE

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        LambdaResponse:
            JSON-serializable response following API Gateway Lambda Proxy
            output format. Includes status code, headers, and response body.

    Example:
        >>> event = {'body': '{"target_url": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['shortUrl']
        'http://localhost:3000/r/q3ZbT0'
    """
    # 1- Get application's config
    try:
        config = ShortLinksConfig.from_lambda_config(load_config('shorten_url'), prefix=app_prefix())
    except (ConfigurationError, BotoCoreError, ClientError) as e:
        logger.error('Failed to load configuration.', extra={'reason': str(e)})
        return _error(500, 'Internal Server Error', CONFIGURATION_ERROR)

    # 2- Extract original URL from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        return _error(400, 'Bad Request (invalid JSON body)', INVALID_JSON)
    if not isinstance(request_body, dict):
        return _error(400, 'Bad Request (invalid JSON body)', INVALID_JSON)

    target_url = request_body.get('target_url', request_body.get('targetUrl'))
    if target_url is None or target_url == '':
        return _error(400, "Bad Request (missing 'target_url' or 'targetUrl' in JSON body)", MISSING_TARGET_URL)

    # 3- Resolve or allocate the short link
    try:
        store = RecordStoreRedisDAO(**config.redis.as_dao_kwargs(), prefix=config.key_prefix)
        service = ShortLinkService(store, config)
        link = service.get_or_create(target_url)
        short_url = service.short_url(link, base_url(event))
    except InvalidInputError:
        return _error(400, "Bad Request ('target_url' must be a non-empty string)", INVALID_TARGET_URL)
    except DataStoreError as e:
        logger.error('Record store unavailable.', extra={'reason': str(e)})
        return _error(503, 'Service Unavailable (record store unavailable)', STORE_UNAVAILABLE)
    except ExhaustedRetriesError as e:
        logger.error('Shortcode allocation failed.', extra={'attempts': e.attempts})
        return _error(500, 'Internal Server Error (could not allocate a unique shortcode)', SHORTCODE_SPACE_EXHAUSTED)
    except Exception:
        logger.exception('Unexpected error while shortening URL.')
        return _error(500, 'Internal Server Error', UNKNOWN_INTERNAL_SERVER_ERROR)

    # 4- Return successful response to user
    return _response(
        200,
        {
            'message': f'Successfully shortened {target_url} to {short_url}',
            'targetUrl': target_url,
            'shortUrl': short_url,
            'shortcode': link.code,
        },
    )
