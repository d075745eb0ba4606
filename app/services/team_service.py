"""팀 서비스 — 팀 생성/조회 비즈니스 로직.

Team Service — Business logic for creating and listing teams.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.member import Team
from app.repositories.team_repository import team_repository
from app.schemas.member import TeamCreate, TeamResponse
from app.utils.exceptions import DuplicateError


class TeamService:
    """팀 관련 비즈니스 로직을 처리하는 서비스.

    Service handling team business logic.
    """

    def _to_response(self, team: Team) -> TeamResponse:
        return TeamResponse(
            id=str(team.id),
            name=team.name,
            created_at=team.created_at,
        )

    async def list_teams(self, db: AsyncSession) -> list[TeamResponse]:
        """모든 팀을 이름순으로 조회합니다 — List all teams ordered by name."""
        teams = await team_repository.get_all(db, order_by=Team.name)
        return [self._to_response(t) for t in teams]

    async def create_team(self, db: AsyncSession, data: TeamCreate) -> TeamResponse:
        """새 팀을 생성합니다.

        Create a new team.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 팀 생성 데이터 (Team creation data)

        Returns:
            TeamResponse: 생성된 팀 (Created team)

        Raises:
            DuplicateError: 같은 이름의 팀이 이미 존재할 때 (Team name already exists)
        """
        if await team_repository.exists(db, {"name": data.name}):
            raise DuplicateError("Team name already exists")

        team: Team = await team_repository.create(db, {"name": data.name})
        return self._to_response(team)


# 싱글턴 인스턴스 — Singleton instance
team_service: TeamService = TeamService()
