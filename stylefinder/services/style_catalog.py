from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy.orm import Session

from stylefinder.models import Style

DEMO_STYLES: list[dict[str, Any]] = [
    {
        "id": "style-1",
        "name": "Elegant Evening Ensemble",
        "designer": "Sophia Laurent",
        "description": "A sophisticated black dress paired with statement gold jewelry for formal events.",
        "occasion": "formal",
        "body_type": "hourglass",
        "gender": "female",
        "image": "https://images.unsplash.com/photo-1539008835657-9e8e9680c956?w=800&q=80",
    },
    {
        "id": "style-2",
        "name": "Modern Professional",
        "designer": "Marcus Chen",
        "description": "Sharp tailored blazer with crisp white shirt and slim-fit trousers.",
        "occasion": "business",
        "body_type": "rectangle-male",
        "gender": "male",
        "image": "https://images.unsplash.com/photo-1507679799987-c73779587ccf?w=800&q=80",
    },
    {
        "id": "style-3",
        "name": "Casual Chic Weekend",
        "designer": "Emma Rodriguez",
        "description": "Flowing blouse, high-waisted jeans and minimalist accessories.",
        "occasion": "casual",
        "body_type": "pear",
        "gender": "female",
        "image": "https://images.unsplash.com/photo-1534528741775-53994a69daeb?w=800&q=80",
    },
    {
        "id": "style-4",
        "name": "Romantic Date Night",
        "designer": "Isabella Stone",
        "description": "Delicate lace details and soft silhouettes for intimate evenings.",
        "occasion": "date-night",
        "body_type": "hourglass",
        "gender": "female",
        "image": "https://images.unsplash.com/photo-1515372039744-b8f02a3ae446?w=800&q=80",
    },
    {
        "id": "style-5",
        "name": "Smart Casual Blazer Look",
        "designer": "James Mitchell",
        "description": "Unstructured blazer over a knit tee with chinos and loafers.",
        "occasion": "casual",
        "body_type": "trapezoid-male",
        "gender": "male",
        "image": "https://images.unsplash.com/photo-1500917293891-ef795e70e1f6?w=800&q=80",
    },
    {
        "id": "style-6",
        "name": "Sultry Date Night",
        "designer": "Valentina Cruz",
        "description": "Bodycon midi with strappy heels and a structured clutch.",
        "occasion": "date-night",
        "body_type": "plus-size",
        "gender": "female",
        "image": "/attached_assets/Plus_D1_1761306109712.jpeg",
    },
]

_STYLE_FIELDS = ("name", "designer", "description", "occasion", "body_type", "gender", "image")


def get_style(db: Session, style_id: str) -> Style | None:
    return db.query(Style).filter(Style.id == style_id).first()


def seed_styles(db: Session, rows: Iterable[dict[str, Any]] = DEMO_STYLES) -> int:
    """Insert or update styles keyed by id. Returns the number of rows written."""
    written = 0
    for row in rows:
        style = get_style(db, row["id"])
        if style is None:
            db.add(Style(id=row["id"], **{k: row.get(k, "") for k in _STYLE_FIELDS}))
        else:
            for key in _STYLE_FIELDS:
                if key in row:
                    setattr(style, key, row[key])
        written += 1

    db.commit()
    return written
