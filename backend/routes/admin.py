# backend/routes/admin.py
from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy import func
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
from utils.sessions import require_admin, revoke_user_sessions
from utils.hashing import get_password_hash, unusable_password_hash
from utils.audit import write_log, client_ip
from schemas import user as schemas

router = APIRouter(prefix="/auth/users", tags=["Admin"])


def _get_user_or_404(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def _email_taken(db: Session, email: str, exclude_id: int = None) -> bool:
    query = db.query(User).filter(func.lower(User.email) == email.strip().lower())
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    return query.first() is not None


# List all users, newest first (Admin only)
@router.get("", response_model=schemas.UserListEnvelope)
def list_users(db: Session = Depends(get_db), current_user: User = Depends(require_admin)):
    users = db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()
    return {"success": True, "users": users}


# Create an account with any role (Admin only)
@router.post("", response_model=schemas.UserEnvelope, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: schemas.AdminUserCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    if _email_taken(db, payload.email):
        raise HTTPException(status_code=400, detail="User already exists with this email")

    user = User(
        email=payload.email.strip().lower(),
        # Without a password the account stays locked until an admin sets one
        password_hash=get_password_hash(payload.password) if payload.password else unusable_password_hash(),
        role=payload.role,
        first_name=payload.first_name,
        last_name=payload.last_name,
        company=payload.company,
        phone=payload.phone,
        is_active=payload.is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    write_log(db, user_id=current_user.id, action="USER_CREATE", resource="users",
              ip=client_ip(request), meta={"id": user.id, "email": user.email, "role": user.role})
    return {"success": True, "user": user}


# Update profile, role, status or password (Admin only)
@router.put("/{user_id}", response_model=schemas.UserEnvelope)
def update_user(
    user_id: int,
    payload: schemas.AdminUserUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    changes = payload.model_dump(exclude_unset=True)

    # Prevent admin from removing their own admin role
    if user_id == current_user.id and "role" in changes and changes["role"] != "admin":
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot remove your own admin role")

    user = _get_user_or_404(db, user_id)

    if changes.get("email") is not None:
        if _email_taken(db, changes["email"], exclude_id=user.id):
            raise HTTPException(status_code=400, detail="User already exists with this email")
        changes["email"] = changes["email"].strip().lower()

    password = changes.pop("password", None)
    if password:
        user.password_hash = get_password_hash(password)

    for key, value in changes.items():
        if value is None and key in ("email", "first_name", "last_name", "role", "is_active"):
            continue
        setattr(user, key, value)

    db.commit()
    db.refresh(user)

    # A deactivated account must not keep working sessions
    if not user.is_active:
        revoke_user_sessions(db, user.id)

    write_log(db, user_id=current_user.id, action="USER_UPDATE", resource="users",
              ip=client_ip(request), meta={"id": user.id, "fields": sorted(payload.model_fields_set)})
    return {"success": True, "user": user}


# Delete a user account and its sessions (Admin only)
@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    # Prevent self-deletion
    if user_id == current_user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot delete your own account")

    user = _get_user_or_404(db, user_id)
    email = user.email

    # Sessions go first; the user row cannot be removed while they reference it
    revoke_user_sessions(db, user_id)
    db.delete(user)
    db.commit()

    write_log(db, user_id=current_user.id, action="USER_DELETE", resource="users",
              ip=client_ip(request), meta={"id": user_id, "email": email})
    return {"success": True, "message": "User deleted successfully"}
