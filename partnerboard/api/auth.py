"""
FastAPI router module for the authentication adjunct.

Key Endpoints:
- GET /auth/password/requirements - Human-readable password policy
- POST /auth/password/validate - Check a password against the policy
- POST /auth/mfa/send-code - Issue an email MFA code for the caller

Error contract of /auth/mfa/send-code (body: {"error": message}):
- 401: Authorization header missing/malformed, or the token does not resolve
- 400: Body is not valid JSON or lacks a userId
- 403: userId is not the authenticated user
- 500: Configuration missing, storage or delivery failure

Dependencies:
- partnerboard/core/database.py: get_db_pool
- partnerboard/services/auth.py: resolve_user
- partnerboard/services/mfa.py: ensure_own_user, issue_mfa_code
- partnerboard/services/password_policy.py: validate_password
"""

import logging
from typing import Optional

from fastapi import APIRouter, Header, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from partnerboard.core.database import DatabaseNotConfiguredError, get_db_pool
from partnerboard.core.dependencies import SettingsDep
from partnerboard.models.schemas import (
    MfaCodeRequest,
    MfaCodeResponse,
    PasswordValidateRequest,
    PasswordValidation,
)
from partnerboard.services.auth import resolve_user
from partnerboard.services.errors import InvalidRequestError, PartnerboardError
from partnerboard.services.mfa import ensure_own_user, issue_mfa_code
from partnerboard.services.password_policy import PASSWORD_REQUIREMENTS, validate_password


# =============================================================================
# Module Configuration
# =============================================================================

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Belső szerverhiba történt."


# =============================================================================
# Router Definition
# =============================================================================

router = APIRouter(prefix="/auth")


def _error_response(error: PartnerboardError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


# =============================================================================
# Password Policy
# =============================================================================


@router.get("/password/requirements")
async def get_password_requirements() -> dict:
    return {"requirements": PASSWORD_REQUIREMENTS}


@router.post("/password/validate", response_model=PasswordValidation)
async def check_password(body: PasswordValidateRequest) -> PasswordValidation:
    """
    Validate a password against the strength policy.

    Example Response:
        {"isValid": false, "errors": ["Tartalmazzon legalább egy számot"]}
    """
    return validate_password(body.password)


# =============================================================================
# POST /auth/mfa/send-code
# =============================================================================


async def _read_code_request(request: Request) -> MfaCodeRequest:
    try:
        body = await request.json()
    except ValueError as e:
        raise InvalidRequestError("Érvénytelen JSON formátum.") from e

    try:
        return MfaCodeRequest.model_validate(body)
    except ValidationError as e:
        raise InvalidRequestError("Hiányzó vagy érvénytelen userId.") from e


@router.post(
    "/mfa/send-code",
    response_model=MfaCodeResponse,
    response_model_exclude_none=True,
)
async def send_mfa_code(
    request: Request,
    settings: SettingsDep,
    authorization: Optional[str] = Header(default=None),
):
    """
    Issue an email MFA code for the authenticated caller.

    The code is stored with a 10 minute expiry and a reset attempt counter.
    When SMTP credentials are not configured the code is still stored and the
    response carries a warning instead of failing. The caller is authenticated
    and the body validated before a database connection is borrowed.

    Example Request:
        POST /auth/mfa/send-code
        Authorization: Bearer <access token>
        {"userId": "8f6c..."}

    Example Responses:
        {"success": true}
        {"success": true, "warning": "Email rendszer nincs beállítva, de a kód generálva."}
        {"error": "Nincs jogosultságod ehhez a művelethez."}   (403)
    """
    try:
        user = await run_in_threadpool(resolve_user, authorization, settings)
        code_request = await _read_code_request(request)
        ensure_own_user(user, code_request.userId)

        pool = await get_db_pool()
        async with pool.acquire() as db:
            return await issue_mfa_code(db, user, code_request.userId, settings)

    except DatabaseNotConfiguredError:
        raise
    except PartnerboardError as e:
        if e.status_code >= 500:
            logger.error(f"POST /auth/mfa/send-code failed: {e.message}")
        else:
            logger.warning(f"POST /auth/mfa/send-code rejected ({e.status_code}): {e.message}")
        return _error_response(e)
    except Exception as e:
        logger.error(f"Unexpected error in send_mfa_code: {str(e)}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})
