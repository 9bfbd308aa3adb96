from fastapi import APIRouter, Depends, HTTPException, status
from workout_manager.db import PersistenceService, get_persistence
from workout_manager.error_handlers import INVALID_CREDENTIALS
from workout_manager.errors import UserNotFound
from workout_manager.models import User
from workout_manager.schemas.user import LoginRead, MessageRead, UserLogin, UserRegister
from workout_manager.security import burn_verify, hash_password, verify_password

router = APIRouter(tags=["auth"])

@router.post("/register", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
def register(payload: UserRegister, db: PersistenceService = Depends(get_persistence)):
    # Only the hash ever reaches the store
    db.register(User(username=payload.username, password=hash_password(payload.password)))
    return {"message": "registration successful"}

@router.post("/login", response_model=LoginRead)
def login(payload: UserLogin, db: PersistenceService = Depends(get_persistence)):
    try:
        user = db.authenticate(payload.username, payload.password)
    except UserNotFound:
        burn_verify()
        raise
    if not verify_password(payload.password, user.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)
    return {"message": "login successful", "username": user.username}
