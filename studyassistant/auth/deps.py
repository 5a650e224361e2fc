from fastapi import Request, Depends
from sqlalchemy.orm import Session

from studyassistant.db.session import SessionLocal
from studyassistant.errors import UnauthenticatedError, NotAuthorizedError
from studyassistant.utils.security import user_id_from_token
from studyassistant.models.user import User

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def _get_token(request: Request) -> str | None:
    auth = request.headers.get("Authorization")
    if auth and auth.lower().startswith("bearer "):
        return auth.split(" ", 1)[1].strip() or None
    return None

def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    token = _get_token(request)
    if not token:
        raise UnauthenticatedError("Not authorized, no token")
    user = db.get(User, user_id_from_token(token))
    if user is None:
        raise UnauthenticatedError("User not found")
    return user

def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise NotAuthorizedError("Admin access required")
    return user
