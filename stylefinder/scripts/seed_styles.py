#!/usr/bin/env python3
from __future__ import annotations

from stylefinder.db.base import Base
from stylefinder.db.session import SessionLocal, engine
from stylefinder.services.style_catalog import seed_styles


def main() -> None:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        count = seed_styles(db)
        print(f"seeded styles={count}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
