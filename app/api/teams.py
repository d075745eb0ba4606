"""팀 라우터 — 팀 생성/조회 엔드포인트.

Team Router — Team creation and listing endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.member import TeamCreate, TeamResponse
from app.services.team_service import team_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[TeamResponse])
async def list_teams(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[TeamResponse]:
    """팀 목록을 이름순으로 조회합니다."""
    return await team_service.list_teams(db)


@router.post("", response_model=TeamResponse, status_code=201)
async def create_team(
    data: TeamCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TeamResponse:
    """새 팀을 생성합니다. 이름이 중복되면 409.

    Create a new team.
    """
    result: TeamResponse = await team_service.create_team(db, data)
    await db.commit()
    return result
