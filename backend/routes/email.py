# backend/routes/email.py
import logging
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from database import get_db
from models.email import EmailTemplate, EmailLog
from models.users import User
from routes.content import get_content_store
from utils.content_store import ContentStore
from utils.sessions import require_admin
from utils.audit import write_log, client_ip
from utils.mailer import get_mailer, personalize
import schemas.email as email_schemas

logger = logging.getLogger(__name__)

# Every email route is admin-only
router = APIRouter(prefix="/email", tags=["Email"], dependencies=[Depends(require_admin)])


def _template_or_404(db: Session, template_id: int) -> EmailTemplate:
    template = db.query(EmailTemplate).filter(EmailTemplate.id == template_id).first()
    if not template:
        raise HTTPException(status_code=404, detail="Template not found")
    return template


# =========================
# TEMPLATES
# =========================
@router.get("/templates", response_model=email_schemas.EmailTemplateListEnvelope)
def list_templates(db: Session = Depends(get_db)):
    templates = db.query(EmailTemplate).order_by(EmailTemplate.created_at.desc(), EmailTemplate.id.desc()).all()
    return {"success": True, "templates": templates}


@router.post("/templates", response_model=email_schemas.EmailTemplateEnvelope, status_code=status.HTTP_201_CREATED)
def create_template(payload: email_schemas.EmailTemplateCreate, db: Session = Depends(get_db)):
    template = EmailTemplate(name=payload.name, subject=payload.subject, body=payload.body, is_active=True)
    db.add(template)
    db.commit()
    db.refresh(template)
    return {"success": True, "template": template}


@router.put("/templates/{template_id}", response_model=email_schemas.EmailTemplateEnvelope)
def update_template(template_id: int, payload: email_schemas.EmailTemplateUpdate, db: Session = Depends(get_db)):
    template = _template_or_404(db, template_id)
    for key, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(template, key, value)
    db.commit()
    db.refresh(template)
    return {"success": True, "template": template}


@router.delete("/templates/{template_id}")
def delete_template(template_id: int, db: Session = Depends(get_db)):
    template = _template_or_404(db, template_id)
    db.delete(template)
    db.commit()
    return {"success": True, "message": "Template deleted successfully"}


# =========================
# DISPATCH
# =========================
Message = Tuple[str, str, str]


# Database work for a dispatch runs in the threadpool, never on the event loop
def _build_messages(db: Session, payload: email_schemas.SendEmailRequest) -> List[Message]:
    if payload.template_id is not None:
        _template_or_404(db, payload.template_id)

    target_users: List[User] = []
    if payload.user_ids:
        found = {
            u.id: u
            for u in db.query(User).filter(User.id.in_(payload.user_ids), User.is_active.is_(True)).all()
        }
        target_users = [found[i] for i in dict.fromkeys(payload.user_ids) if i in found]

    # Registered users get their own placeholders filled in
    messages = [
        (u.email, personalize(payload.subject, u), personalize(payload.body, u)) for u in target_users
    ]

    # Ad hoc addresses receive the text verbatim, once each
    seen = {u.email.lower() for u in target_users}
    for address in map(str, payload.custom_emails):
        if address.lower() in seen:
            continue
        seen.add(address.lower())
        messages.append((address, payload.subject, payload.body))

    if not messages:
        raise HTTPException(status_code=400, detail="None of the selected users can receive email")
    return messages


def _record_dispatch(
    db: Session,
    payload: email_schemas.SendEmailRequest,
    addresses: List[str],
    successful: int,
    errors: List[str],
    user_id: int,
    ip: Optional[str],
) -> None:
    failed = len(errors)
    if failed == 0:
        log_status, log_error = "sent", None
    elif successful == 0:
        log_status, log_error = "failed", "; ".join(errors)
    else:
        log_status, log_error = "sent", f"Partial delivery: {'; '.join(errors)}"

    db.add(EmailLog(
        to=addresses,
        subject=payload.subject,
        body=payload.body,
        status=log_status,
        template_id=payload.template_id,
        error=log_error,
    ))
    db.commit()

    write_log(db, user_id=user_id, action="EMAIL_SEND", resource="email", status=log_status.upper(),
              ip=ip, meta={"total": len(addresses), "successful": successful, "failed": failed})


@router.post("/send", response_model=email_schemas.SendEmailResponse)
async def send_email(
    payload: email_schemas.SendEmailRequest,
    request: Request,
    db: Session = Depends(get_db),
    mailer=Depends(get_mailer),
    current_user: User = Depends(require_admin),
):
    if not payload.user_ids and not payload.custom_emails:
        raise HTTPException(status_code=400, detail="At least one recipient is required")
    if not payload.subject.strip() or not payload.body.strip():
        raise HTTPException(status_code=400, detail="Subject and body are required")

    messages = await run_in_threadpool(_build_messages, db, payload)

    successful = 0
    errors: List[str] = []
    for address, subject, body in messages:
        result = await mailer.send(address, subject, body)
        if result.success:
            successful += 1
        else:
            errors.append(f"{address}: {result.error}")

    addresses = [address for address, _, _ in messages]
    if errors:
        logger.warning("Email dispatch: %d of %d deliveries failed", len(errors), len(addresses))

    await run_in_threadpool(
        _record_dispatch, db, payload, addresses, successful, errors, current_user.id, client_ip(request)
    )

    return {
        "success": True,
        "message": f"Email sent to {successful} recipient(s)",
        "stats": {"total": len(addresses), "successful": successful, "failed": len(errors)},
    }


@router.get("/logs", response_model=email_schemas.EmailLogListEnvelope)
def list_email_logs(limit: int = Query(100, ge=1, le=1000), db: Session = Depends(get_db)):
    logs = db.query(EmailLog).order_by(EmailLog.sent_at.desc(), EmailLog.id.desc()).limit(limit).all()
    items = []
    for log in logs:
        item = email_schemas.EmailLogResponse.model_validate(log)
        item.template_name = log.template.name if log.template else None
        items.append(item)
    return {"success": True, "logs": items}


# =========================
# SETTINGS
# =========================
@router.get("/settings", response_model=email_schemas.EmailSettingsEnvelope)
def get_email_settings(store: ContentStore = Depends(get_content_store)):
    return {"success": True, "settings": store.get("email")}


@router.put("/settings", response_model=email_schemas.EmailSettingsEnvelope)
def update_email_settings(payload: email_schemas.EmailSettings, store: ContentStore = Depends(get_content_store)):
    saved = store.put("email", payload.model_dump(by_alias=True))
    return {"success": True, "settings": saved}
