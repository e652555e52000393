# justyou/api/v1/auth.py
"""
Bearer-token verification. Sign-in happens at the identity provider; the
tokens it issues are HS256 JWTs whose ``sub`` is the user id.
"""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from justyou.core import security
from justyou.core.security import CurrentUser

bearer = HTTPBearer(auto_error=False)


async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(bearer)) -> CurrentUser:
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        td = security.decode_access_token(credentials.credentials)
    except security.JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    if not td.sub:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return CurrentUser(id=td.sub, email=td.email)


def ensure_owner(doc: dict, user: CurrentUser, owner_field: str = "userId", allow_admin: bool = False) -> None:
    if doc.get(owner_field) == user.id:
        return
    if allow_admin and security.is_admin(user):
        return
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed")
