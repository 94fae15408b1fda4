"""Database seeding script (sample bills)"""
import asyncio
import sys
from pathlib import Path

# Add parent directory to path to import vasooly modules
sys.path.append(str(Path(__file__).parent.parent))

from sqlalchemy import select
from vasooly.database import AsyncSessionLocal, init_db
from vasooly.models.bill import Bill, ExpenseCategory
from vasooly.schemas.bill import BillCreate, ParticipantInput
from vasooly.services.bill_service import BillService
from vasooly.services.status_manager import compute_settlement_summary


async def seed_bills():
    """Seed the database with sample bills"""

    bills_data = [
        {
            "title": "Goa trip - villa",
            "total_amount": "18000.00",
            "category": ExpenseCategory.TRAVEL,
            "participants": ["Aarav", "Diya", "Kabir", "Meera"]
        },
        {
            "title": "Friday dinner",
            "total_amount": "100.00",
            "category": ExpenseCategory.FOOD,
            "participants": ["Aarav", "Diya", "Kabir"]
        },
        {
            "title": "Concert tickets",
            "total_amount": "4999.99",
            "category": ExpenseCategory.ENTERTAINMENT,
            "participants": ["Diya", "Meera"]
        }
    ]

    await init_db()

    async with AsyncSessionLocal() as session:
        created_count = 0
        skipped_count = 0

        for bill_data in bills_data:
            # Check if bill already exists
            result = await session.execute(
                select(Bill).where(Bill.title == bill_data["title"])
            )
            if result.scalars().first():
                print(f"⏭️  Skipping {bill_data['title']} - already exists")
                skipped_count += 1
                continue

            bill = await BillService.create_bill(
                BillCreate(
                    title=bill_data["title"],
                    total_amount=bill_data["total_amount"],
                    category=bill_data["category"],
                    participants=[ParticipantInput(name=name) for name in bill_data["participants"]]
                ),
                session
            )

            summary = compute_settlement_summary(bill)
            print(f"✅ Created bill: {bill.title} ({summary.pending_count} pending)")
            created_count += 1

        print(f"\n📊 Summary:")
        print(f"   Created: {created_count} bills")
        print(f"   Skipped: {skipped_count} bills (already exist)")
        print(f"   Total: {len(bills_data)} bills")


async def main():
    """Main function"""
    print("🌱 Starting database seeding...\n")

    try:
        await seed_bills()
        print("\n✨ Database seeding completed successfully!")
    except Exception as e:
        print(f"\n❌ Error seeding database: {e}")
        raise


if __name__ == "__main__":
    asyncio.run(main())
