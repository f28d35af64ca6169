from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fudge.db import get_db
from fudge.errors import failure_message
from fudge.middleware.auth import authenticate
from fudge.models.user import User
from fudge.schemas import LoginRequest, RegisterRequest, dump_user, envelope
from fudge.services import auth as auth_service

router = APIRouter(prefix="/api/auth", tags=["auth"])


# регистрация
@router.post("/register", status_code=201)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    with failure_message(db, "Registration failed"):
        user = auth_service.register_user(db, payload)
    return envelope("User registered successfully", auth_service.auth_result(user))


# вход
@router.post("/login")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    with failure_message(db, "Login failed"):
        user = auth_service.login_user(db, payload.email, payload.password)
    return envelope("Login successful", auth_service.auth_result(user))


# текущий пользователь по токену
@router.get("/me")
def whoami(user: User = Depends(authenticate)):
    return envelope("Current user", dump_user(user))
