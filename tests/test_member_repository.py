"""회원 레포지토리 쿼리 테스트.

Member repository query tests — search, subqueries, CASE, joins and projections
against teamA(member1 10, member2 20) / teamB(member3 30, member4 40).
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Member
from app.repositories.member_repository import member_repository
from app.repositories.team_repository import team_repository
from app.schemas.member import MemberDto, MemberSearchCondition, UserDto
from tests.conftest import add_members


def names(members: list[Member]) -> list[str]:
    return [m.username for m in members]


class TestBasicQueries:
    """기본 조회 테스트."""

    async def test_find_by_username(self, db: AsyncSession, members):
        found = await member_repository.find_by_username(db, "member1")
        assert found is not None
        assert found.username == "member1"
        assert found.age == 10

    async def test_find_by_username_missing(self, db: AsyncSession, members):
        assert await member_repository.find_by_username(db, "nobody") is None

    async def test_get_all_skips_unspecified_filters(self, db: AsyncSession, members):
        all_members = await member_repository.get_all(db, filters={"age": None})
        assert len(all_members) == 4
        only = await member_repository.get_all(db, filters={"username": "member2", "age": 20})
        assert names(list(only)) == ["member2"]

    async def test_team_get_by_name(self, db: AsyncSession, teams):
        team = await team_repository.get_by_name(db, "teamB")
        assert team is not None and team.id == teams["teamB"].id
        assert await team_repository.get_by_name(db, "teamC") is None

    async def test_exists_compares_none_as_null(self, db: AsyncSession, members):
        """exists()는 None을 IS NULL로 비교한다 — 팀 없는 회원이 없으면 False."""
        assert await member_repository.exists(db, {"team_id": None}) is False
        await add_members(db, [("loner", 0)])
        assert await member_repository.exists(db, {"team_id": None}) is True

    async def test_exists_by_value(self, db: AsyncSession, members):
        assert await member_repository.exists(db, {"username": "member3", "age": 30}) is True
        assert await member_repository.exists(db, {"username": "member3", "age": 31}) is False


class TestDynamicSearch:
    """동적 검색 테스트 — 조합 방식과 where 인자 방식."""

    @pytest.mark.parametrize("method", ["search", "search_where_params"])
    async def test_username_and_age(self, db: AsyncSession, members, method):
        condition = MemberSearchCondition(username="member1", age=10)
        result = await getattr(member_repository, method)(db, condition)
        assert names(result) == ["member1"]

    @pytest.mark.parametrize("method", ["search", "search_where_params"])
    async def test_no_condition_returns_all(self, db: AsyncSession, members, method):
        result = await getattr(member_repository, method)(db, MemberSearchCondition())
        assert names(result) == ["member1", "member2", "member3", "member4"]

    @pytest.mark.parametrize("method", ["search", "search_where_params"])
    async def test_team_and_age_range(self, db: AsyncSession, members, method):
        condition = MemberSearchCondition(team_name="teamB", age_goe=35)
        result = await getattr(member_repository, method)(db, condition)
        assert names(result) == ["member4"]

    async def test_age_range(self, db: AsyncSession, members):
        condition = MemberSearchCondition(age_goe=20, age_loe=30)
        assert names(await member_repository.search(db, condition)) == ["member2", "member3"]

    async def test_member_teams_include_teamless(self, db: AsyncSession, members):
        await add_members(db, [("loner", 0)])
        rows = await member_repository.search_member_teams(db, MemberSearchCondition(age=0))
        assert len(rows) == 1
        assert rows[0].username == "loner"
        assert rows[0].team_id is None
        assert rows[0].team_name is None

    async def test_member_teams_by_team(self, db: AsyncSession, members):
        rows = await member_repository.search_member_teams(
            db, MemberSearchCondition(team_name="teamA")
        )
        assert [(r.username, r.team_name) for r in rows] == [
            ("member1", "teamA"),
            ("member2", "teamA"),
        ]

    async def test_search_page(self, db: AsyncSession, members):
        rows, total = await member_repository.search_page(
            db, MemberSearchCondition(), page=2, per_page=3
        )
        assert total == 4
        assert [r.username for r in rows] == ["member4"]

    async def test_search_page_stable_with_duplicates(self, db: AsyncSession):
        """이름/나이가 같은 회원도 페이지 사이에서 중복/누락되지 않는다."""
        created = await add_members(db, [("twin", 7)] * 5)
        seen: list[str] = []
        for page in (1, 2, 3):
            rows, total = await member_repository.search_page(
                db, MemberSearchCondition(username="twin"), page=page, per_page=2
            )
            assert total == 5
            seen.extend(str(r.member_id) for r in rows)
        assert sorted(seen) == sorted(str(m.id) for m in created)
        assert seen == sorted(seen)


class TestSubqueries:
    """서브쿼리 테스트."""

    async def test_age_goe_average(self, db: AsyncSession, members):
        result = await member_repository.find_age_goe_average(db)
        assert [m.age for m in result] == [30, 40]

    async def test_username_with_average_age(self, db: AsyncSession, members):
        rows = await member_repository.list_username_with_average_age(db)
        assert rows == [
            ("member1", 25.0),
            ("member2", 25.0),
            ("member3", 25.0),
            ("member4", 25.0),
        ]


class TestCaseExpressions:
    """CASE 식 테스트."""

    async def test_simple_case(self, db: AsyncSession, members):
        assert await member_repository.list_age_labels(db) == ["열살", "스무살", "기타", "기타"]

    async def test_searched_case(self, db: AsyncSession, members):
        assert await member_repository.list_age_bands(db) == [
            "0~20살", "0~20살", "21~30살", "기타",
        ]


class TestExpressions:
    """상수 및 문자열 연결 테스트."""

    async def test_concat_filtered(self, db: AsyncSession, members):
        assert await member_repository.list_username_age(db, "member1") == ["member1_10"]

    async def test_concat_unfiltered(self, db: AsyncSession, members):
        result = await member_repository.list_username_age(db)
        assert result == ["member1_10", "member2_20", "member3_30", "member4_40"]

    async def test_constant(self, db: AsyncSession, members):
        rows = await member_repository.list_with_constant(db, "A")
        assert rows[0] == ("member1", "A")
        assert all(value == "A" for _, value in rows)


class TestJoins:
    """조인 테스트."""

    async def test_theta_join(self, db: AsyncSession, members):
        """회원 이름이 팀 이름과 같은 회원 조회."""
        await add_members(db, [("teamA", 0), ("teamB", 0), ("teamC", 0)])
        result = await member_repository.find_username_matching_team_name(db)
        assert names(result) == ["teamA", "teamB"]

    async def test_join_on_filtering(self, db: AsyncSession, members):
        """팀 이름이 teamA인 팀만 조인, 회원은 모두 조회."""
        rows = await member_repository.list_with_team_filtered(db, "teamA")
        assert [(m.username, t.name if t else None) for m, t in rows] == [
            ("member1", "teamA"),
            ("member2", "teamA"),
            ("member3", None),
            ("member4", None),
        ]


class TestProjections:
    """DTO 프로젝션 테스트."""

    async def test_member_dtos(self, db: AsyncSession, members):
        dtos = await member_repository.list_member_dtos(db)
        assert all(isinstance(d, MemberDto) for d in dtos)
        assert dtos[:2] == [
            MemberDto(username="member1", age=10),
            MemberDto(username="member2", age=20),
        ]

    async def test_user_dtos_use_max_age(self, db: AsyncSession, members):
        dtos = await member_repository.list_user_dtos(db)
        assert all(isinstance(d, UserDto) for d in dtos)
        assert [d.name for d in dtos] == ["member1", "member2", "member3", "member4"]
        assert {d.age for d in dtos} == {40}
