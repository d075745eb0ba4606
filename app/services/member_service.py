"""회원 서비스 — 회원 생성 및 동적 검색 비즈니스 로직.

Member Service — Business logic for member creation and dynamic search.
Validates search conditions and converts repository rows into DTOs.
"""

from typing import Any

from sqlalchemy import Row
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.member import Member, Team
from app.repositories.member_repository import member_repository
from app.repositories.team_repository import team_repository
from app.schemas.member import (
    MemberCreate,
    MemberDto,
    MemberResponse,
    MemberSearchCondition,
    MemberTeamDto,
)
from app.utils.exceptions import BadRequestError, NotFoundError
from app.utils.pagination import Page


def _row_to_member_team(row: Row[Any]) -> MemberTeamDto:
    """회원-팀 행을 DTO로 변환 — Convert a member/team row into a DTO."""
    return MemberTeamDto(
        member_id=str(row.member_id),
        username=row.username,
        age=row.age,
        team_id=str(row.team_id) if row.team_id is not None else None,
        team_name=row.team_name,
    )


class MemberService:
    """회원 관련 비즈니스 로직을 처리하는 서비스.

    Service handling member business logic.
    """

    def _validate_condition(self, condition: MemberSearchCondition) -> None:
        """나이 범위 조건을 검증합니다.

        Reject an inverted age range; both bounds must be specified to compare.

        Raises:
            BadRequestError: age_goe가 age_loe보다 클 때 (age_goe greater than age_loe)
        """
        if (
            condition.age_goe is not None
            and condition.age_loe is not None
            and condition.age_goe > condition.age_loe
        ):
            raise BadRequestError("age_goe must be less than or equal to age_loe")

    async def create_member(self, db: AsyncSession, data: MemberCreate) -> MemberResponse:
        """새 회원을 생성합니다. 팀 이름이 주어지면 해당 팀에 소속시킵니다.

        Create a new member, attaching it to the named team when given.

        Raises:
            NotFoundError: 팀 이름에 해당하는 팀이 없을 때 (Team not found)
        """
        team: Team | None = None
        if data.team_name is not None:
            team = await team_repository.get_by_name(db, data.team_name)
            if team is None:
                raise NotFoundError("Team not found")

        member: Member = await member_repository.create(db, {
            "username": data.username,
            "age": data.age,
            "team_id": team.id if team is not None else None,
        })
        return MemberResponse(
            id=str(member.id),
            username=member.username,
            age=member.age,
            team_id=str(team.id) if team is not None else None,
            team_name=team.name if team is not None else None,
            created_at=member.created_at,
        )

    async def search(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
    ) -> list[MemberTeamDto]:
        """검색 조건에 맞는 회원을 팀 정보와 함께 조회합니다.

        Search members by condition, returning member/team DTOs.
        """
        self._validate_condition(condition)
        rows = await member_repository.search_member_teams(db, condition)
        return [_row_to_member_team(r) for r in rows]

    async def search_page(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page: int = 1,
        per_page: int = 20,
    ) -> Page:
        """검색 결과를 페이지 단위로 조회합니다 — Paginated member search."""
        self._validate_condition(condition)
        rows, total = await member_repository.search_page(db, condition, page, per_page)
        return Page.build(
            [_row_to_member_team(r) for r in rows],
            total=total,
            page=page,
            per_page=per_page,
        )

    async def older_than_average(self, db: AsyncSession) -> list[MemberDto]:
        """나이가 평균 이상인 회원 목록 — Members aged at or above the average."""
        members = await member_repository.find_age_goe_average(db)
        return [MemberDto(username=m.username, age=m.age) for m in members]

    async def age_bands(self, db: AsyncSession) -> list[str]:
        """회원별 나이 구간 라벨 — Age band label per member, ordered by username."""
        return await member_repository.list_age_bands(db)


# 싱글턴 인스턴스 — Singleton instance
member_service: MemberService = MemberService()
