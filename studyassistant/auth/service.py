
from sqlalchemy.orm import Session
from studyassistant.errors import ConflictError, UnauthenticatedError
from studyassistant.models.user import User
from studyassistant.utils.security import hash_password, verify_password, create_access_token

def _normalize_email(email: str) -> str:
    return email.strip().lower()

def register_user(db: Session, full_name: str, email: str, password: str) -> User:
    email = _normalize_email(email)
    if db.query(User).filter(User.email == email).first():
        raise ConflictError("User already exists")
    user = User(full_name=full_name.strip(), email=email, password_hash=hash_password(password))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user

def authenticate_user(db: Session, email: str, password: str) -> User:
    user = db.query(User).filter(User.email == _normalize_email(email)).first()
    if not user or not verify_password(password, user.password_hash):
        raise UnauthenticatedError("Invalid credentials")
    return user

def issue_token(user: User) -> str:
    return create_access_token(user.id)
