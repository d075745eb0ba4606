"""회원 및 팀 관련 SQLAlchemy ORM 모델 정의.

Member and Team SQLAlchemy ORM model definitions.
A member optionally belongs to one team; a team has many members.

Tables:
    - teams: 팀 (Teams, unique name)
    - members: 회원 (Members with username, age and optional team)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Integer, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Team(Base):
    """팀 모델 — 회원이 소속되는 그룹.

    Team model — Group that members belong to.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 팀 이름 (Team name, globally unique)
        created_at: 생성 일시 UTC (Creation timestamp)

    Relationships:
        members: 소속 회원 목록 (Members of this team)
    """

    __tablename__ = "teams"

    # 팀 고유 식별자 — Team unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 팀 이름 — Team display name (unique)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    members = relationship("Member", back_populates="team")

    def __repr__(self) -> str:
        return f"Team(id={self.id}, name={self.name!r})"


class Member(Base):
    """회원 모델 — 검색 대상 레코드.

    Member model — The record type that search conditions filter over.
    Team is optional; members without a team are kept on team deletion.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        team_id: 소속 팀 FK (Team foreign key, nullable)
        username: 회원 이름 (Username, not unique)
        age: 나이 (Age in years)
        created_at: 생성 일시 UTC (Creation timestamp)

    Relationships:
        team: 소속 팀 (Owning team, optional)
    """

    __tablename__ = "members"

    # 회원 고유 식별자 — Member unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 소속 팀 FK — Owning team (팀 삭제 시 NULL로 변경, set to NULL on team deletion)
    team_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True, index=True)
    # 회원 이름 — Member username
    username: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    # 나이 — Age (0 허용, zero is a valid age)
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    team = relationship("Team", back_populates="members")

    def __repr__(self) -> str:
        return f"Member(id={self.id}, username={self.username!r}, age={self.age})"
