"""
JSON error response writing.

Every error document goes out with the same fixed anti-caching headers.
The response is built from scratch, so headers set by the failed
handler and any held-back output never reach the client.
"""

from starlette.responses import Response
from starlette.types import Receive, Scope, Send

from json_exception_handler.domain.models import ErrorKind, ErrorRecord

JSON_MEDIA_TYPE = "application/json"

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "Expires": "-1",
}

HTTP_400 = 400
HTTP_500 = 500
MIN_ERROR_STATUS = 400


def response_status(record: ErrorRecord) -> int:
    """Return the HTTP status to send for `record`.

    The record's own status is used when it is an error status; otherwise
    validation failures fall back to 400 and everything else to 500.
    """
    if record.status >= MIN_ERROR_STATUS:
        return record.status
    if record.error_type == ErrorKind.DATA_VALIDATION_ERROR:
        return HTTP_400
    return HTTP_500


class ErrorDocumentResponse(Response):
    """Pretty-printed camelCase JSON error document with no-cache headers."""

    media_type = JSON_MEDIA_TYPE

    def __init__(self, record: ErrorRecord, status_code: int) -> None:
        super().__init__(
            content=record.to_json(),
            status_code=status_code,
            headers=NO_CACHE_HEADERS,
        )


async def write_error_response(
    record: ErrorRecord, scope: Scope, receive: Receive, send: Send
) -> None:
    """Send the error document for `record` as the whole HTTP response.

    A single attempt: if the send fails the error propagates to the caller.
    """
    response = ErrorDocumentResponse(record, response_status(record))
    await response(scope, receive, send)


async def write_empty_response(
    status_code: int, scope: Scope, receive: Receive, send: Send
) -> None:
    """Finish the response with no body and the given status."""
    await Response(status_code=status_code)(scope, receive, send)
