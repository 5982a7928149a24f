# leave_mgmt/services/token_service.py
import time, jwt
from typing import Dict
from django.conf import settings
from django.core.exceptions import ValidationError

ACCESS_PURPOSE = "access"

# ===== Core services =====
def issue_access_token(employee, ttl: int = None) -> str:
    """
    Signed bearer token for an employee; `sub` carries Employee.auth_id.
    """
    now = int(time.time())
    if ttl is None:
        ttl = int(getattr(settings, "JWT_ACCESS_TTL", 3600))
    payload = {
        "sub": employee.auth_id,
        "purpose": ACCESS_PURPOSE,
        "iat": now,
        "exp": now + int(ttl),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGO)

def decode_access_token(token: str) -> Dict:
    """
    - Decode and verify a bearer token (signature, exp, purpose, subject).
    - Returns the claims; raises ValidationError otherwise.
    """
    if not token:
        raise ValidationError("missing token")

    try:
        data = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGO])
    except jwt.ExpiredSignatureError:
        raise ValidationError("token expired")
    except jwt.InvalidTokenError:
        raise ValidationError("invalid token")

    if data.get("purpose") != ACCESS_PURPOSE:
        raise ValidationError("wrong purpose")
    if not data.get("sub"):
        raise ValidationError("missing subject")
    return data
