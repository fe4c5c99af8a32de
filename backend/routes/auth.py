# backend/routes/auth.py
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy import func
from sqlalchemy.orm import Session

from utils.hashing import get_password_hash, verify_password
from utils.sessions import create_session, revoke_session, get_current_user, bearer_token
from utils.audit import write_log, client_ip
from models.users import User
from schemas import user as schemas
from database import get_db

router = APIRouter(prefix="/auth", tags=["Auth"])


def find_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()


# Register a new user
@router.post("/register", response_model=schemas.UserEnvelope, status_code=status.HTTP_201_CREATED)
def register(user: schemas.UserCreate, request: Request, db: Session = Depends(get_db)):
    # Normalize email input
    normalized_email = user.email.strip().lower()

    # Check for existing user
    if find_user_by_email(db, normalized_email):
        write_log(db, user_id=None, action="REGISTER", resource="auth", status="FAIL",
                  ip=client_ip(request), meta={"email": normalized_email, "reason": "Email exists"})
        raise HTTPException(status_code=400, detail="User already exists with this email")

    # Role is always "user" on self-registration
    new_user = User(
        email=normalized_email,
        password_hash=get_password_hash(user.password),
        role="user",
        first_name=user.first_name,
        last_name=user.last_name,
        company=user.company,
        phone=user.phone,
        is_active=True,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    write_log(db, user_id=new_user.id, action="REGISTER", resource="auth", status="SUCCESS",
              ip=client_ip(request), meta={"email": new_user.email})

    return {"success": True, "user": new_user}


# Authenticate user and issue a session token
@router.post("/login", response_model=schemas.LoginResponse)
def login(payload: schemas.UserLogin, request: Request, db: Session = Depends(get_db)):
    db_user = find_user_by_email(db, payload.email)

    # Validate credentials and log failure on error
    if not db_user or not db_user.is_active or not verify_password(payload.password, db_user.password_hash):
        write_log(db, user_id=(db_user.id if db_user else None), action="LOGIN", resource="auth",
                  status="FAIL", ip=client_ip(request), meta={"email": payload.email})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    db_user.last_login_at = datetime.utcnow()
    db.commit()

    session = create_session(db, db_user)
    db.refresh(db_user)

    write_log(db, user_id=db_user.id, action="LOGIN", resource="auth",
              status="SUCCESS", ip=client_ip(request), meta={"email": db_user.email})

    return {"success": True, "user": db_user, "token": session.token}


# Drop the caller's session; succeeds with or without a valid token
@router.post("/logout")
def logout(request: Request, token: Optional[str] = Depends(bearer_token), db: Session = Depends(get_db)):
    revoke_session(db, token)
    return {"success": True, "message": "Logged out successfully"}


# Retrieve current authenticated user details
@router.get("/me", response_model=schemas.UserEnvelope)
def me(current_user: User = Depends(get_current_user)):
    return {"success": True, "user": current_user}
