from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..core.security import create_access_token
from ..schemas.user import Token
from ..services import users as user_service

router = APIRouter()


@router.post("/login", response_model=Token)
def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    """Exchange email (sent as ``username``) and password for a bearer token"""
    user = user_service.authenticate(db, form_data.username, form_data.password)
    token = create_access_token(user.email)
    return {"access_token": token, "token_type": "bearer"}
