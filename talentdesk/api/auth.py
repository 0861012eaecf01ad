import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..repositories.users import UserRepository
from ..schemas.auth import LoginRequest, RegisterRequest
from ..services.accounts import authenticate, register_user, user_to_public

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", status_code=201)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    user = register_user(
        users=UserRepository(db),
        name=payload.name,
        email=payload.email,
        password=payload.password,
        company=payload.company,
        role=payload.role,
    )
    return {
        "message": "User created successfully",
        "user": user_to_public(user),
    }


@router.post("/login")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    return authenticate(users=UserRepository(db), email=payload.email, password=payload.password)
