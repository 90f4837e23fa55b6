from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from app.users.auth import bearer_token, decode_access_token, get_current_user

# Location prefixes FastAPI puts in front of the field path
_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def _field_name(err: dict) -> str:
    # Unparseable JSON reports the character offset as its location
    if err.get("type") == "json_invalid":
        return "body"

    parts = [str(p) for p in err.get("loc", ())]
    if parts and parts[0] in _LOCATIONS:
        parts = parts[1:]
    return ".".join(parts)


def _depends_on(dependant, call) -> bool:
    return any(
        dep.call is call or _depends_on(dep, call) for dep in dependant.dependencies
    )


def _route_requires_auth(request: Request) -> bool:
    dependant = getattr(request.scope.get("route"), "dependant", None)
    return dependant is not None and _depends_on(dependant, get_current_user)


def _unauthorized_before_body(request: Request, exc: RequestValidationError):
    """
    FastAPI decodes the JSON body before resolving dependencies, so a broken
    body would otherwise answer 400 ahead of the authentication gate.
    """
    if not any(err.get("type") == "json_invalid" for err in exc.errors()):
        return None
    if not _route_requires_auth(request):
        return None

    try:
        decode_access_token(bearer_token(request.headers.get("Authorization")))
    except HTTPException as auth_exc:
        return JSONResponse(
            status_code=auth_exc.status_code,
            content={"detail": auth_exc.detail},
            headers=auth_exc.headers,
        )
    return None


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    unauthorized = _unauthorized_before_body(request, exc)
    if unauthorized is not None:
        return unauthorized

    errors = [
        {"field": _field_name(err), "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    logger.debug(f"Validation failed on {request.method} {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation error", "errors": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc) or "An unexpected error occurred"},
    )


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
