"""초기 데이터 시드 스크립트 — 팀 2개와 회원 4명 생성.

Seed script — Creates sample teams and members for trying out searches.

Usage:
    python -m app.seed

Creates:
    - 2개 팀: teamA, teamB (2 teams)
    - 4명 회원: member1(10, teamA), member2(20, teamA),
      member3(30, teamB), member4(40, teamB) (4 members)
"""

import asyncio

from sqlalchemy import select

from app.database import async_session, engine, Base
from app.models import Member, Team

SEED_TEAMS: tuple[str, ...] = ("teamA", "teamB")
SEED_MEMBERS: tuple[tuple[str, int, str], ...] = (
    ("member1", 10, "teamA"),
    ("member2", 20, "teamA"),
    ("member3", 30, "teamB"),
    ("member4", 40, "teamB"),
)


async def seed() -> None:
    """데이터베이스를 샘플 데이터로 시드합니다.

    Seed the database with sample teams and members.
    Creates tables if they don't exist.

    Idempotent: 팀이 이미 있으면 건너뜁니다 (Skips if any team exists).
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        result = await db.execute(select(Team).limit(1))
        if result.scalar_one_or_none():
            print("Already seeded. Skipping.")
            return

        teams: dict[str, Team] = {}
        for name in SEED_TEAMS:
            team: Team = Team(name=name)
            db.add(team)
            teams[name] = team
        await db.flush()  # flush로 team.id 생성 (Flush to generate team ids)

        for username, age, team_name in SEED_MEMBERS:
            db.add(Member(username=username, age=age, team_id=teams[team_name].id))

        await db.commit()
        print(f"Seeded {len(SEED_TEAMS)} teams and {len(SEED_MEMBERS)} members.")


if __name__ == "__main__":
    asyncio.run(seed())
