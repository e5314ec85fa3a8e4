#!/usr/bin/env python3
"""
Standalone script to create the default categories for the Expense Tracker API
Usage: python seed_categories.py
"""

import asyncio
import sys
from app.core.config import settings
from app.core.database import build_document_store
from app.crud.category import seed_default_categories

async def seed_categories() -> int:
    print("🌱 Seeding categories...")

    db = build_document_store(settings)
    try:
        created = await seed_default_categories(db)
    except Exception as e:
        print(f"❌ Error seeding: {e}")
        return 1

    for category in created:
        print(f"✅ Created: {category['name']} (ID: {category['id']})")
    if not created:
        print("Default categories already exist, nothing to do")

    print("🎉 Seed completed!")
    return 0

if __name__ == "__main__":
    sys.exit(asyncio.run(seed_categories()))
