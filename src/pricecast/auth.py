import secrets
from typing import Optional

from fastapi import HTTPException, Request, Security, status
from fastapi.security import APIKeyHeader

API_KEY_HEADER = "x-api-key"

_api_key_header = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


def require_predict_key(
    request: Request,
    provided: Optional[str] = Security(_api_key_header),
) -> None:
    """Guard for ``/predict``; open when the app was created without a key."""
    expected: Optional[str] = request.app.state.api_key
    if not expected:
        return
    if provided is None or not secrets.compare_digest(provided.encode(), expected.encode()):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid api key")
