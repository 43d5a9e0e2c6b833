# utils/response.py
from rest_framework.response import Response


def api_response(status_code=200, status="success", data=None, error_code=None, error_message=None, meta=None):
    """
    Standardized API response.

    The envelope always carries statusCode/status/data/errorCode/errorMessage;
    ``meta`` (pagination, allowed_fields) is only included when given.
    """
    body = {
        "statusCode": status_code,
        "status": status,
        "data": data if data is not None else {},
        "errorCode": error_code,
        "errorMessage": error_message,
    }
    if meta is not None:
        body["meta"] = meta
    return Response(body, status=status_code or 200)
