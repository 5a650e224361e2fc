
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from studyassistant.auth.deps import get_db, get_current_user
from studyassistant.models.user import User
from studyassistant.schemas.auth import RegisterIn, LoginIn, AuthOut, MeOut, UserOut
from studyassistant.auth.service import register_user, authenticate_user, issue_token

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=AuthOut, status_code=201)
def register(body: RegisterIn, db: Session = Depends(get_db)):
    user = register_user(db, body.full_name, body.email, body.password)
    return AuthOut(token=issue_token(user), user=UserOut.model_validate(user))

@router.post("/login", response_model=AuthOut)
def login(body: LoginIn, db: Session = Depends(get_db)):
    user = authenticate_user(db, body.email, body.password)
    return AuthOut(token=issue_token(user), user=UserOut.model_validate(user))

@router.get("/me", response_model=MeOut)
def me(user: User = Depends(get_current_user)):
    return MeOut(user=UserOut.model_validate(user))
