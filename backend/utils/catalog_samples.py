# utils/catalog_samples.py
# Placeholder catalog served when the product table cannot be read.
from datetime import datetime
from typing import Dict, List, Optional


def _sample_products() -> List[dict]:
    now = datetime.utcnow()
    return [
        {
            "id": 1,
            "name": "Industrial Excavator X2000",
            "description": "Heavy-duty excavator for large construction projects",
            "category": "Heavy Machinery",
            "price": "Contact for Quote",
            "images": [],
            "specifications": [
                {"key": "Weight", "value": "25 tons"},
                {"key": "Engine Power", "value": "300 HP"},
            ],
            "tags": ["Excavator", "Construction", "Heavy Duty"],
            "featured": True,
            "visible": True,
            "rating": 4.8,
            "created_at": now,
            "updated_at": now,
        },
        {
            "id": 2,
            "name": "Professional Welding Kit Pro",
            "description": "Complete welding solution for industrial applications",
            "category": "Industrial Tools",
            "price": "$2,499",
            "images": [],
            "specifications": [
                {"key": "Power", "value": "240V"},
                {"key": "Welding Range", "value": "1-12mm"},
            ],
            "tags": ["Welding", "Tools", "Professional"],
            "featured": True,
            "visible": True,
            "rating": 4.6,
            "created_at": now,
            "updated_at": now,
        },
        {
            "id": 3,
            "name": "Safety Helmet Premium",
            "description": "Advanced safety helmet with integrated communication",
            "category": "Safety Equipment",
            "price": "$189",
            "images": [],
            "specifications": [
                {"key": "Material", "value": "Carbon Fiber"},
                {"key": "Weight", "value": "380g"},
            ],
            "tags": ["Safety", "Helmet", "Communication"],
            "featured": True,
            "visible": True,
            "rating": 4.9,
            "created_at": now,
            "updated_at": now,
        },
    ]


def sample_product_list() -> dict:
    products = _sample_products()
    return {"products": products, "total": len(products)}


def sample_product(product_id: int) -> Optional[dict]:
    lookup: Dict[int, dict] = {p["id"]: p for p in _sample_products()}
    return lookup.get(product_id)
