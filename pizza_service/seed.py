"""
Seed data for an empty database.

Creates the default global admin (so franchises and the menu can be managed
at all) and the starter menu. Each part is skipped when its table already
has rows, so running it twice is harmless.
"""

import logging

from sqlalchemy.orm import Session

from . import config
from .models import MenuItem, User
from .roles import Admin
from .services.users import create_user


logger = logging.getLogger(__name__)


def seed_admin(db: Session) -> bool:
    if db.query(User).count() > 0:
        return False
    create_user(
        db,
        name=config.DEFAULT_ADMIN_NAME,
        email=config.DEFAULT_ADMIN_EMAIL,
        password=config.DEFAULT_ADMIN_PASSWORD,
        grants=[Admin()],
    )
    logger.info("Seeded default admin %s", config.DEFAULT_ADMIN_EMAIL)
    return True


def seed_menu(db: Session) -> int:
    existing = db.query(MenuItem).count()
    if existing > 0:
        logger.debug("Menu already has %d items, not seeding", existing)
        return 0
    for entry in config.DEFAULT_MENU:
        db.add(MenuItem(**entry))
    db.commit()
    logger.info("Seeded %d menu items", len(config.DEFAULT_MENU))
    return len(config.DEFAULT_MENU)


def seed_all(db: Session) -> None:
    seed_admin(db)
    seed_menu(db)
