from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import crud
from ..database import get_db
from ..models import User
from ..schemas import LoginIn, LoginOut, UserOut
from ..security import create_access_token, get_current_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    user = crud.users.authenticate(db, payload.username, payload.password)
    token = create_access_token(sub=str(user.id), extra_claims={"role": user.role})
    return LoginOut(
        message="Login successful",
        user=UserOut.model_validate(user),
        access_token=token,
    )


@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)):
    return UserOut.model_validate(user)
