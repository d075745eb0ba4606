"""회원 라우터 — 회원 생성 및 동적 검색 엔드포인트.

Member Router — Member creation and dynamic search endpoints.
Every search parameter is optional; omitted parameters add no filter.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.member import (
    MemberCreate,
    MemberDto,
    MemberResponse,
    MemberSearchCondition,
    MemberTeamDto,
)
from app.services.member_service import member_service
from app.utils.pagination import Page

router: APIRouter = APIRouter()


def search_condition(
    username: Annotated[str | None, Query(description="회원 이름 일치")] = None,
    team_name: Annotated[str | None, Query(description="팀 이름 일치")] = None,
    age: Annotated[int | None, Query(description="나이 일치")] = None,
    age_goe: Annotated[int | None, Query(description="최소 나이 (이상)")] = None,
    age_loe: Annotated[int | None, Query(description="최대 나이 (이하)")] = None,
) -> MemberSearchCondition:
    """쿼리 파라미터로 검색 조건을 구성합니다 — Build the search condition from query params."""
    return MemberSearchCondition(
        username=username,
        team_name=team_name,
        age=age,
        age_goe=age_goe,
        age_loe=age_loe,
    )


@router.post("", response_model=MemberResponse, status_code=201)
async def create_member(
    data: MemberCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """새 회원을 생성합니다.

    Create a new member, optionally in an existing team.
    """
    result: MemberResponse = await member_service.create_member(db, data)
    await db.commit()
    return result


@router.get("/search", response_model=list[MemberTeamDto])
async def search_members(
    condition: Annotated[MemberSearchCondition, Depends(search_condition)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[MemberTeamDto]:
    """조건에 맞는 회원을 팀 정보와 함께 조회합니다.

    Search members by optional conditions.
    """
    return await member_service.search(db, condition)


@router.get("/search/page", response_model=Page)
async def search_members_page(
    condition: Annotated[MemberSearchCondition, Depends(search_condition)],
    db: Annotated[AsyncSession, Depends(get_db)],
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 20,
) -> Page:
    """조건 검색 결과를 페이지 단위로 조회합니다.

    Paginated member search.
    """
    return await member_service.search_page(db, condition, page, per_page)


@router.get("/stats/older-than-average", response_model=list[MemberDto])
async def older_than_average(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[MemberDto]:
    """나이가 평균 이상인 회원을 조회합니다."""
    return await member_service.older_than_average(db)


@router.get("/stats/age-bands", response_model=list[str])
async def age_bands(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[str]:
    """회원별 나이 구간 라벨을 조회합니다."""
    return await member_service.age_bands(db)
