#!/usr/bin/env python3
"""
Script to create database tables
Run this after the database is created to set up all tables
"""
import logging
import sys

from eventeye.core.logging import setup_logging
from eventeye.database import Base, engine
from eventeye.models import user_model, profile_model, event_model, interest_model, message_model  # noqa: F401

logger = logging.getLogger(__name__)

def create_tables():
    """Create all database tables"""
    try:
        logger.info("Creating database tables...")
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")
        return True
    except Exception as e:
        logger.error(f"Error creating tables: {e}")
        return False

if __name__ == "__main__":
    setup_logging()
    sys.exit(0 if create_tables() else 1)
