"""API Gateway Lambda proxy responses

Every response carries the CORS headers needed by the browser frontend.
Error bodies follow one shape:

    {"message": "<Reason> (<detail>)", "error_code": "<ErrorCode>"}
"""

import os
import json

from ttlshortener.types import LambdaResponse
from ttlshortener.constants import ENV


def cors_headers() -> dict[str, str]:
    return {
        'Access-Control-Allow-Origin': os.environ.get(ENV.App.CORS_ALLOW_ORIGIN, '*'),
        'Access-Control-Allow-Headers': 'Origin,Content-Type,Accept',
        'Access-Control-Allow-Methods': 'OPTIONS,POST,GET,DELETE',
    }


def _response(status_code: int, body: dict | None = None, headers: dict[str, str] | None = None) -> LambdaResponse:
    response = {
        'statusCode': status_code,
        'headers': {**cors_headers(), **(headers or {})},
    }
    if body is not None:
        response['headers']['Content-Type'] = 'application/json'
        response['body'] = json.dumps(body)
    return response


def _error(status_code: int, base: str, message: str | None, error_code: str | None) -> LambdaResponse:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['error_code'] = str(error_code)
    return _response(status_code, body)


def response_200(body: dict | None = None) -> LambdaResponse:
    return _response(200, body)


def response_201(body: dict) -> LambdaResponse:
    return _response(201, body)


def response_204() -> LambdaResponse:
    return _response(204)


def response_302(*, location: str) -> LambdaResponse:
    return _response(302, headers={'Location': location})


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(400, 'Bad Request', message, error_code)


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(404, 'Not Found', message, error_code)


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(500, 'Internal Server Error', message, error_code)


def response_503(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(503, 'Service Unavailable', message, error_code)


def response_504(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(504, 'Gateway Timeout', message, error_code)
