"""
Database Initialization Utility

This module handles automatic creation of:
- All database tables
- Reference data (property types, statuses, listing types)

All operations are idempotent - they won't fail if objects already exist.
"""

from properlia import db
import logging

logger = logging.getLogger(__name__)

PROPERTY_TYPES = [
    ('departament', 'departamento'),
    ('house', 'casa'),
    ('land', 'terreno'),
    ('retail space', 'local comercial'),
    ('warehouse', 'bodega o nave'),
]

STATUSES = [
    ('rent', 'renta'),
    ('sell', 'venta'),
]

LISTING_TYPES = [
    ('sale', 'venta'),
    ('rent', 'renta'),
]


def create_all_tables():
    """Create all database tables if they don't exist"""
    try:
        # Import all models to ensure SQLAlchemy knows about them
        from properlia.models import (
            Attachment, Property, PropertyType, Status, ListingType,
            GeneralInfo, User
        )

        # Create all tables (idempotent - won't recreate existing tables)
        db.create_all()
        logger.info("All database tables created/verified successfully")
    except Exception as e:
        logger.error(f"Error creating tables: {e}")
        raise


def _seed(model, rows):
    created = 0
    for name, es_name in rows:
        if model.query.filter_by(name=name).first() is None:
            db.session.add(model(name=name, es_name=es_name))
            created += 1
    db.session.commit()
    logger.info(f"{model.__tablename__}: {created} created, {model.query.count()} total")
    return created


def seed_reference_data():
    """Insert the default lookup rows that are missing"""
    from properlia.models import PropertyType, Status, ListingType

    return {
        'property_types': _seed(PropertyType, PROPERTY_TYPES),
        'statuses': _seed(Status, STATUSES),
        'listing_types': _seed(ListingType, LISTING_TYPES),
    }


def initialize_database():
    """
    Main initialization function that sets up the entire database.
    This function is idempotent and safe to call multiple times.
    """
    try:
        logger.info("Starting database initialization...")

        # Step 1: Create all tables
        create_all_tables()

        # Step 2: Reference data
        seed_reference_data()

        logger.info("Database initialization completed successfully!")
        return True
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        db.session.rollback()
        return False
