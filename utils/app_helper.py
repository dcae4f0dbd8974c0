import os
from datetime import datetime, timezone, timedelta
from fastapi import FastAPI, Request, status, HTTPException
from fastapi.responses import JSONResponse

import jwt
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.orm import Session

from db.models import User
from db.schemas import CurrentCaller
from services.seller_service import SellerService
from utils import app_logger, resp_msgs
from utils.exceptions import LocatorError


SECRET_KEY = os.getenv('SECRET_KEY')
ACCESS_TOKEN_EXPIRE_MINUTES = os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 10080)


def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"][1:])  # Extract field name
        errors.append({
            "field": field,
            "message": error["msg"]
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "status": "error",
            "message": "Validation failed. Please check your input.",
            "errors": errors
        },
    )


def locator_exception_handler(request: Request, exc: LocatorError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "error", "message": exc.message, "code": exc.code},
    )


HTTP_ERROR_CODES = {
    status.HTTP_401_UNAUTHORIZED: "UNAUTHENTICATED",
    status.HTTP_403_FORBIDDEN: "PERMISSION_DENIED",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
}


def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "status": "error",
            "message": exc.detail,
            "code": HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
        },
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(LocatorError, locator_exception_handler)


def create_auth_token(user, expires_delta: timedelta = None):
    """Generates an access token with expiration."""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=int(ACCESS_TOKEN_EXPIRE_MINUTES)))
    user_type = user.user_type.value if hasattr(user.user_type, "value") else str(user.user_type)
    data = {
        'user_id': user.id,
        'user_type': user_type,
        "exp": expire
    }
    return jwt.encode(data, SECRET_KEY, algorithm="HS256")


def decode_jwt(token: str):
    """Decodes and verifies JWT token"""
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=resp_msgs.TOKEN_EXPIRED)
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=resp_msgs.INVALID_TOKEN)


def verify_user_from_token(token: str, db: Session):
    """
        Resolves the caller behind a JWT token.
        :return: is_verified, message, CurrentCaller or None
    """
    try:
        payload = decode_jwt(token)
        user_id = payload.get("user_id")
        user_type = payload.get("user_type")

        user = db.query(User).filter(User.id == user_id).first()
        if not user or user.user_type.value != user_type:
            return False, resp_msgs.INVALID_USER_AUTH, None

        seller = SellerService.get_seller_by_user_id(db=db, user_id=user.id)
        caller = CurrentCaller(
            user_id=user.id,
            seller_id=seller.id if seller else None,
            role=user.user_type,
        )
        return True, "", caller

    except HTTPException as e:
        return False, e.detail, None
    except Exception as e:
        app_logger.exceptionlogs(f"Error in verify user from token, Error: {e}")
        return False, resp_msgs.INVALID_USER_AUTH, None
