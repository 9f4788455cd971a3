from datetime import datetime, timedelta, timezone
from jose import jwt
from outage_planner.core.config import settings

def create_access_token(
    sub: str,
    role: str,
    user_id: int,
    work_center_id: int | None = None,
    branch_id: int | None = None,
) -> str:
    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=settings.JWT_EXPIRES_MIN)
    payload = {
        "sub": sub,
        "role": role,
        "uid": user_id,
        "wc": work_center_id,
        "br": branch_id,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALG)

def decode_token(token: str) -> dict:
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
