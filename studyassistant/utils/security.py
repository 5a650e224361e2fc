from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError, ExpiredSignatureError
from studyassistant.config import settings
from studyassistant.errors import UnauthenticatedError

ALGORITHM = "HS256"

# bcrypt_sha256 lifts bcrypt's 72-byte password limit; plain bcrypt stays for verifying older hashes
pwd_context = CryptContext(schemes=["bcrypt_sha256", "bcrypt"], deprecated="auto")

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(password: str, hashed: str | None) -> bool:
    return bool(hashed) and pwd_context.verify(password, hashed)

def create_access_token(user_id: int, expires_minutes: int | None = None) -> str:
    minutes = settings.access_token_expire_minutes if expires_minutes is None else expires_minutes
    now = datetime.now(timezone.utc)
    claims = {"sub": str(user_id), "iat": now, "exp": now + timedelta(minutes=minutes)}
    return jwt.encode(claims, settings.secret_key, algorithm=ALGORITHM)

def user_id_from_token(token: str) -> int:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        raise UnauthenticatedError("Token expired")
    except JWTError:
        raise UnauthenticatedError("Invalid token")
    sub = str(payload.get("sub") or "")
    if not sub.isdigit():
        raise UnauthenticatedError("Invalid token")
    return int(sub)
