# backend/populate_db.py
"""Seed an empty database with the default admin, catalog and email templates.

Each table is only filled when it is empty, so running this against a live
database is harmless. Expired sessions are purged on the same pass.

    python populate_db.py
"""
import logging

from sqlalchemy.orm import Session

from config import settings
from database import SessionLocal, init_db
from models.users import User
from models.product import Product
from models.category import Category
from models.email import EmailTemplate
from utils.hashing import get_password_hash
from utils.sessions import cleanup_expired_sessions

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    {"name": "Heavy Machinery", "description": "Construction and industrial heavy machinery equipment"},
    {"name": "Welding Equipment", "description": "Professional welding tools and equipment"},
    {"name": "Safety Equipment", "description": "Industrial safety gear and protective equipment"},
    {"name": "Industrial Tools", "description": "Professional tools for industrial applications"},
]

DEFAULT_PRODUCTS = [
    {
        "name": "Heavy Duty Excavator X2000",
        "description": "Professional grade excavator designed for heavy construction work. Features advanced hydraulic systems and GPS tracking for optimal performance.",
        "category": "Heavy Machinery",
        "price": "Starting at $450,000",
        "images": ["/api/placeholder/400/300"],
        "specifications": [
            {"key": "Weight", "value": "20 tons"},
            {"key": "Engine Power", "value": "300 HP"},
            {"key": "Bucket Capacity", "value": "2.5 m³"},
            {"key": "Max Digging Depth", "value": "7.2 m"},
        ],
        "tags": ["excavator", "heavy-duty", "construction"],
        "featured": True,
        "rating": 4.8,
    },
    {
        "name": "Industrial Welding Station Pro",
        "description": "State-of-the-art welding station with automated controls and safety features. Perfect for industrial manufacturing environments.",
        "category": "Welding Equipment",
        "price": "Starting at $15,000",
        "images": ["/api/placeholder/400/300"],
        "specifications": [
            {"key": "Welding Current", "value": "400A"},
            {"key": "Power Supply", "value": "380V"},
            {"key": "Duty Cycle", "value": "100%"},
            {"key": "Wire Feed Speed", "value": "0.5-25 m/min"},
        ],
        "tags": ["welding", "automated", "safety"],
        "featured": True,
        "rating": 4.9,
    },
    {
        "name": "Safety Helmet with HUD",
        "description": "Advanced safety helmet featuring augmented reality display, impact resistance, and integrated communication systems.",
        "category": "Safety Equipment",
        "price": "Starting at $299",
        "images": ["/api/placeholder/400/300"],
        "specifications": [
            {"key": "Impact Rating", "value": "ANSI Z89.1"},
            {"key": "Battery Life", "value": "8 hours"},
            {"key": "Display Type", "value": "AR HUD"},
            {"key": "Communication Range", "value": "500m"},
        ],
        "tags": ["safety", "helmet", "ar", "communication"],
        "featured": True,
        "rating": 4.7,
    },
]

DEFAULT_TEMPLATES = [
    {
        "name": "Welcome Email",
        "subject": "Welcome to IndustrialCo!",
        "body": "Dear {firstName},\n\nWelcome to IndustrialCo! We're excited to have you on board.\n\nIf you have any questions, please don't hesitate to contact us.\n\nBest regards,\nThe IndustrialCo Team",
    },
    {
        "name": "Newsletter Template",
        "subject": "IndustrialCo Monthly Newsletter",
        "body": "Hello {firstName},\n\nHere are the latest updates from IndustrialCo:\n\n- New product launches\n- Industry insights\n- Company news\n\nStay tuned for more!\n\nBest regards,\nIndustrialCo Team",
    },
]


def seed_admin(db: Session) -> bool:
    if db.query(User).count() > 0:
        return False
    db.add(User(
        email=settings.DEFAULT_ADMIN_EMAIL.lower(),
        password_hash=get_password_hash(settings.DEFAULT_ADMIN_PASSWORD),
        role="admin",
        first_name="Admin",
        last_name="User",
        company="IndustrialCo",
        phone="+1 (555) 123-4567",
        is_active=True,
    ))
    db.commit()
    logger.info("Created default admin user %s", settings.DEFAULT_ADMIN_EMAIL)
    return True


def seed_categories(db: Session) -> int:
    if db.query(Category).count() > 0:
        return 0
    db.add_all([Category(is_active=True, **c) for c in DEFAULT_CATEGORIES])
    db.commit()
    return len(DEFAULT_CATEGORIES)


def seed_products(db: Session) -> int:
    if db.query(Product).count() > 0:
        return 0
    ids = {c.name: c.id for c in db.query(Category).all()}
    db.add_all([
        Product(visible=True, category_id=ids.get(p["category"]), **p) for p in DEFAULT_PRODUCTS
    ])
    db.commit()
    return len(DEFAULT_PRODUCTS)


def seed_email_templates(db: Session) -> int:
    if db.query(EmailTemplate).count() > 0:
        return 0
    db.add_all([EmailTemplate(is_active=True, **t) for t in DEFAULT_TEMPLATES])
    db.commit()
    return len(DEFAULT_TEMPLATES)


def seed_defaults(db: Session) -> dict:
    # Categories before products so products can link to them
    result = {
        "admin": seed_admin(db),
        "categories": seed_categories(db),
        "products": seed_products(db),
        "email_templates": seed_email_templates(db),
        "expired_sessions": cleanup_expired_sessions(db),
    }
    logger.info("Database seed finished: %s", result)
    return result


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    init_db()
    session = SessionLocal()
    try:
        seed_defaults(session)
    finally:
        session.close()
