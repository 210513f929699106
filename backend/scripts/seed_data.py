"""
Fill the database with demo users and a sample listing
"""
import logging
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from realty_crm import models  # noqa: F401
from realty_crm.core.config import settings
from realty_crm.core.database import Base, create_db_engine, create_session_factory
from realty_crm.core.logging_config import setup_logging
from realty_crm.core.security import get_password_hash
from realty_crm.models.user import User, UserRole
from realty_crm.models.property import Property

logger = logging.getLogger("seed_data")


def seed_data():
    engine = create_db_engine(settings.DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    db: Session = create_session_factory(engine)()

    try:
        users_data = [
            {
                "email": "admin@example.com",
                "password": "admin123",
                "name": "Admin Demo",
                "role": UserRole.ADMIN
            },
            {
                "email": "agent@example.com",
                "password": "agent123",
                "name": "Agent Demo",
                "role": UserRole.AGENT
            },
            {
                "email": "user@example.com",
                "password": "user123",
                "name": "User Demo",
                "role": UserRole.USER
            },
        ]

        for user_data in users_data:
            existing = db.query(User).filter(User.email == user_data["email"]).first()
            if not existing:
                user = User(
                    email=user_data["email"],
                    hashed_password=get_password_hash(user_data["password"]),
                    name=user_data["name"],
                    role=user_data["role"].value,
                    is_active=True
                )
                db.add(user)
        db.flush()

        agent = db.query(User).filter(User.email == "agent@example.com").first()
        if not db.query(Property).filter(Property.agent_id == agent.id).first():
            db.add(Property(
                title="Sunny family home",
                description="Three bedrooms close to the park",
                type="residential",
                status="available",
                price=350000,
                address={
                    "street": "12 Elm Street",
                    "city": "Springfield",
                    "state": "IL",
                    "zip_code": "62701",
                    "country": "USA",
                },
                features={"bedrooms": 3, "bathrooms": 2, "square_feet": 1800, "parking": 2},
                amenities=["garden", "garage"],
                images=[],
                agent_id=agent.id,
            ))

        db.commit()
        logger.info("Seed data created")

    except SQLAlchemyError:
        db.rollback()
        logger.exception("Seeding failed")
        raise
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    setup_logging(settings)
    seed_data()
