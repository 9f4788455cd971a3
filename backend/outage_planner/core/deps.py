from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from pydantic import ValidationError as PydanticValidationError

from outage_planner.db.session import SessionLocal
from outage_planner.core.security import decode_token
from outage_planner.schemas.auth import Caller, Role
from outage_planner.services.batch import PendingBatch

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_current_caller(token: str = Depends(oauth2_scheme)) -> Caller:
    try:
        payload = decode_token(token)
        return Caller(
            login=payload["sub"],
            user_id=payload["uid"],
            role=payload["role"],
            work_center_id=payload.get("wc"),
            branch_id=payload.get("br"),
        )
    except (JWTError, KeyError, PydanticValidationError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

def require_roles(*roles: Role):
    def _dep(caller: Caller = Depends(get_current_caller)) -> Caller:
        if caller.role not in roles:
            raise HTTPException(status_code=403, detail="Forbidden")
        return caller
    return _dep

def get_pending_batch(request: Request, caller: Caller = Depends(get_current_caller)) -> PendingBatch:
    return request.app.state.pending_batches.for_caller(caller.user_id)
