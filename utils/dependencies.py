from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from db.db_conn import get_db
from db.schemas import CurrentCaller
from utils.app_helper import verify_user_from_token
from utils.freshness import utc_now

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


async def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> CurrentCaller:
    is_verified, msg, caller = verify_user_from_token(token, db=db)
    if not is_verified:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=msg,
            headers={"WWW-Authenticate": "Bearer"},
        )

    return caller


def get_clock():
    """Time source for staleness checks, overridden in tests."""
    return utc_now
