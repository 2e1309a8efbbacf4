from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from src.auth.passwords import hash_password
from src.database import async_session_maker
from src.users.models import User, UserRole


async def create_system_admin():
    from src.config import SYSTEM_ADMIN, SYSTEM_ADMIN_PASSWORD

    if not SYSTEM_ADMIN or not SYSTEM_ADMIN_PASSWORD:
        print("⚠️  SYSTEM_ADMIN or SYSTEM_ADMIN_PASSWORD not set, skipping.")
        return

    async with async_session_maker() as session:
        result = await session.execute(select(User).where(User.email == SYSTEM_ADMIN))
        if result.scalar_one_or_none():
            print(f"✅ System admin already exists ({SYSTEM_ADMIN}), skipping.")
            return

        try:
            session.add(User(
                name="System",
                last_name="Admin",
                email=SYSTEM_ADMIN,
                role=UserRole.SYSTEM_ADMIN,
                hashed_password=hash_password(SYSTEM_ADMIN_PASSWORD),
            ))
            await session.commit()
            print(f"✅ System admin created: {SYSTEM_ADMIN}")
        except IntegrityError:
            print("⚠️ System admin already exists (integrity check)")
