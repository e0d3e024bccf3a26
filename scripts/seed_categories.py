"""Seed default criteria categories and criteria."""

import argparse
import asyncio
import sys
from decimal import Decimal
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import get_db
from src.models.criteria import Criteria
from src.models.criteria_category import CriteriaCategory
from src.utils.weight_validation import validate_weights

# Weights of the default set add up to 100
DEFAULT_CATEGORIES = [
    {
        "name": "Technical Skills",
        "description": "Job-specific knowledge and quality of work",
        "weight": Decimal("40.00"),
        "criteria": [
            ("Code Quality", "Writes readable, tested and maintainable work"),
            ("Problem Solving", "Breaks down problems and finds workable solutions"),
            ("Domain Knowledge", "Understands the systems and business area"),
        ],
    },
    {
        "name": "Communication",
        "description": "Sharing information with the team and stakeholders",
        "weight": Decimal("25.00"),
        "criteria": [
            ("Clarity", "Explains ideas clearly in writing and speech"),
            ("Listening", "Takes feedback and questions into account"),
        ],
    },
    {
        "name": "Teamwork",
        "description": "Collaboration and support of colleagues",
        "weight": Decimal("20.00"),
        "criteria": [
            ("Collaboration", "Works effectively with others toward shared goals"),
            ("Mentoring", "Helps colleagues grow"),
        ],
    },
    {
        "name": "Initiative",
        "description": "Ownership and self-driven improvement",
        "weight": Decimal("15.00"),
        "criteria": [
            ("Ownership", "Drives tasks to completion without prompting"),
        ],
    },
]


class CategorySeeder:
    """Criteria category seeding class."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_categories(self):
        """Create the default categories with their criteria."""
        print("Creating criteria categories...")

        check = validate_weights(
            [(index, item["weight"]) for index, item in enumerate(DEFAULT_CATEGORIES, start=1)]
        )
        if not check.valid:
            raise ValueError(f"Default category weights add up to {check.total}%, expected 100%")

        for category_data in DEFAULT_CATEGORIES:
            existing = await self.session.execute(
                select(CriteriaCategory).where(CriteriaCategory.name == category_data["name"])
            )
            if existing.scalar_one_or_none():
                print(f"Criteria category {category_data['name']} already exists")
                continue

            category = CriteriaCategory(
                name=category_data["name"],
                description=category_data["description"],
                weight=category_data["weight"],
                is_active=True,
            )
            self.session.add(category)
            await self.session.flush()

            for name, description in category_data["criteria"]:
                self.session.add(Criteria(
                    name=name,
                    base_description=description,
                    category_id=category.id,
                    is_active=True,
                ))

            print(f"Created criteria category: {category.name} ({category.weight}%)")

        await self.session.commit()

    async def clear_all_data(self):
        """Delete all criteria and criteria categories."""
        print("Clearing criteria data...")
        try:
            await self.session.execute(delete(Criteria))
            await self.session.execute(delete(CriteriaCategory))
            await self.session.commit()
            print("All criteria data cleared successfully!")
        except Exception:
            await self.session.rollback()
            raise


async def main():
    """Main seeding function."""
    parser = argparse.ArgumentParser(description='Criteria category seeding script')
    parser.add_argument('action', choices=['up', 'down'], help='up: create data, down: clear data')
    args = parser.parse_args()

    try:
        async for session in get_db():
            seeder = CategorySeeder(session)

            if args.action == 'down':
                await seeder.clear_all_data()
            else:
                await seeder.create_categories()
            break

    except Exception as e:
        print(f"Seeding failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
