"""회원 레포지토리 — 동적 검색 및 조회 쿼리.

Member Repository — Dynamic search and read queries for members.
Extends BaseRepository with condition-based search (composed predicate
or where-parameter style), joins to teams, subqueries, CASE expressions,
and DTO projections.
"""

from typing import Any, Sequence

from sqlalchemy import Row, Select, String, and_, case, cast, func, literal, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from app.models.member import Member, Team
from app.repositories.base import BaseRepository
from app.repositories.conditions import Criterion, PredicateComposer, goe, loe
from app.schemas.member import MemberDto, MemberSearchCondition, UserDto
from app.utils.pagination import paginate

# 회원 검색 조건 조합기 — 필드 선언 순서가 WHERE 절 순서
# Member search composer; declaration order is the WHERE clause order
member_search_composer: PredicateComposer = PredicateComposer([
    Criterion("username", Member.username),
    Criterion("team_name", Team.name),
    Criterion("age", Member.age),
    Criterion("age_goe", Member.age, goe),
    Criterion("age_loe", Member.age, loe),
])


class MemberRepository(BaseRepository[Member]):
    """회원 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the members table.
    """

    def __init__(self) -> None:
        super().__init__(Member)

    async def find_by_username(
        self,
        db: AsyncSession,
        username: str,
    ) -> Member | None:
        """이름으로 회원을 조회합니다. 동명이인이 있으면 먼저 생성된 회원.

        Retrieve a member by username; the earliest created wins on duplicates.
        """
        query: Select = (
            select(Member)
            .where(Member.username == username)
            .order_by(Member.created_at)
            .limit(1)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def search(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
    ) -> list[Member]:
        """검색 조건을 하나의 조건으로 결합하여 회원을 조회합니다.

        Search members with all specified criteria composed into one predicate.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 회원 검색 조건 (Member search condition)

        Returns:
            list[Member]: 이름/나이 순 회원 목록 (Members ordered by username, age)
        """
        query: Select = (
            select(Member)
            .outerjoin(Member.team)
            .where(member_search_composer.compose(condition))
            .order_by(Member.username, Member.age)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def search_where_params(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
    ) -> list[Member]:
        """지정된 조건들을 where 인자로 나열하여 회원을 조회합니다.

        Search members passing each specified predicate as a separate
        where() argument. Returns the same members as search().
        """
        query: Select = (
            select(Member)
            .outerjoin(Member.team)
            .where(*member_search_composer.predicates(condition))
            .order_by(Member.username, Member.age)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    def _member_team_query(self, condition: MemberSearchCondition | None) -> Select:
        """회원-팀 프로젝션 쿼리 — Member/team projection query with left join."""
        return (
            select(
                Member.id.label("member_id"),
                Member.username,
                Member.age,
                Team.id.label("team_id"),
                Team.name.label("team_name"),
            )
            .select_from(Member)
            .outerjoin(Member.team)
            .where(member_search_composer.compose(condition))
            .order_by(Member.username, Member.age, Member.id)
        )

    async def search_member_teams(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
    ) -> list[Row[Any]]:
        """검색 조건에 맞는 회원-팀 행을 조회합니다.

        Retrieve member/team rows (member_id, username, age, team_id, team_name).
        Members without a team are included with NULL team columns.
        """
        result = await db.execute(self._member_team_query(condition))
        return list(result.all())

    async def search_page(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[Row[Any]], int]:
        """검색 조건에 맞는 회원-팀 행을 페이지 단위로 조회합니다.

        Paginated variant of search_member_teams().

        Returns:
            tuple[Sequence[Row], int]: (현재 페이지 행, 전체 개수) (Page rows, total count)
        """
        return await paginate(
            db,
            self._member_team_query(condition),
            page=page,
            per_page=per_page,
            scalars=False,
        )

    async def find_age_goe_average(self, db: AsyncSession) -> list[Member]:
        """나이가 전체 평균 이상인 회원을 조회합니다.

        Members whose age is greater than or equal to the average age,
        computed by a scalar subquery over an aliased members table.
        """
        member_sub = aliased(Member, name="member_sub")
        avg_age = select(func.avg(member_sub.age)).scalar_subquery()
        query: Select = (
            select(Member)
            .where(Member.age >= avg_age)
            .order_by(Member.age)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def list_username_with_average_age(
        self,
        db: AsyncSession,
    ) -> list[tuple[str, float]]:
        """각 회원 이름과 전체 평균 나이를 함께 조회합니다.

        Each member's username next to the overall average age (select subquery).
        """
        member_sub = aliased(Member, name="member_sub")
        avg_age = select(func.avg(member_sub.age)).scalar_subquery()
        query: Select = select(Member.username, avg_age).order_by(Member.username)
        result = await db.execute(query)
        return [(username, float(avg)) for username, avg in result.all()]

    async def list_age_labels(self, db: AsyncSession) -> list[str]:
        """나이를 단순 CASE 식으로 라벨링합니다 (10=열살, 20=스무살, 그 외=기타).

        Label each member's age with a simple CASE on the age value.
        """
        label = case(
            {10: "열살", 20: "스무살"},
            value=Member.age,
            else_="기타",
        )
        result = await db.execute(select(label).order_by(Member.username))
        return list(result.scalars().all())

    async def list_age_bands(self, db: AsyncSession) -> list[str]:
        """나이 구간을 검색 CASE 식으로 라벨링합니다.

        Label each member's age band with a searched CASE:
        0-20, 21-30, otherwise "기타".
        """
        band = case(
            (Member.age.between(0, 20), "0~20살"),
            (Member.age.between(21, 30), "21~30살"),
            else_="기타",
        )
        result = await db.execute(select(band).order_by(Member.username))
        return list(result.scalars().all())

    async def list_username_age(
        self,
        db: AsyncSession,
        username: str | None = None,
    ) -> list[str]:
        """이름과 나이를 "username_age" 문자열로 이어 붙여 조회합니다.

        Concatenate username and age as "username_age"; optionally filtered by username.
        """
        concatenated = Member.username + "_" + cast(Member.age, String)
        query: Select = (
            select(concatenated)
            .where(member_search_composer.compose({"username": username}))
            .order_by(Member.username)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def list_with_constant(
        self,
        db: AsyncSession,
        constant: str,
    ) -> list[tuple[str, str]]:
        """각 회원 이름과 상수 값을 함께 조회합니다 — Username paired with a constant."""
        query: Select = (
            select(Member.username, literal(constant, type_=String))
            .order_by(Member.username)
        )
        result = await db.execute(query)
        return [(username, value) for username, value in result.all()]

    async def find_username_matching_team_name(self, db: AsyncSession) -> list[Member]:
        """이름이 어떤 팀 이름과 같은 회원을 조회합니다 (세타 조인).

        Theta join: members and teams in the FROM clause, related only
        by ``members.username = teams.name`` in the WHERE clause.
        """
        query: Select = (
            select(Member)
            .where(Member.username == Team.name)
            .order_by(Member.username)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def list_with_team_filtered(
        self,
        db: AsyncSession,
        team_name: str,
    ) -> list[tuple[Member, Team | None]]:
        """회원은 모두 조회하고, 팀은 이름이 일치하는 경우에만 조인합니다.

        Left join members to teams with the team-name filter in the ON clause:
        every member is returned, the team only when its name matches.
        """
        query: Select = (
            select(Member, Team)
            .outerjoin(Team, and_(Member.team_id == Team.id, Team.name == team_name))
            .order_by(Member.username)
        )
        result = await db.execute(query)
        return [(member, team) for member, team in result.all()]

    async def list_member_dtos(self, db: AsyncSession) -> list[MemberDto]:
        """회원 이름/나이를 MemberDto로 조회합니다 — Username and age as MemberDto."""
        query: Select = select(Member.username, Member.age).order_by(Member.username)
        result = await db.execute(query)
        return [MemberDto(username=username, age=age) for username, age in result.all()]

    async def list_user_dtos(self, db: AsyncSession) -> list[UserDto]:
        """이름을 name으로, 나이를 전체 최대 나이로 UserDto에 담아 조회합니다.

        UserDto per member: ``name`` from username, ``age`` the maximum age
        over all members (labelled scalar subquery).
        """
        member_sub = aliased(Member, name="member_sub")
        max_age = select(func.max(member_sub.age)).scalar_subquery()
        query: Select = (
            select(Member.username.label("name"), max_age.label("age"))
            .order_by(Member.username)
        )
        result = await db.execute(query)
        return [UserDto.model_validate(row._mapping) for row in result.all()]


# 싱글턴 인스턴스 — Singleton instance
member_repository: MemberRepository = MemberRepository()
