"""API 라우터 패키지 — 모든 엔드포인트 통합.

API Router package — Aggregates all endpoints into a single router
for inclusion in the FastAPI application.

Included routers:
    - teams: 팀 관리 (Team management)
    - members: 회원 생성 및 검색 (Member creation and search)
"""

from fastapi import APIRouter

from app.api.members import router as members_router
from app.api.teams import router as teams_router

api_router: APIRouter = APIRouter()

api_router.include_router(teams_router, prefix="/teams", tags=["Teams"])
api_router.include_router(members_router, prefix="/members", tags=["Members"])
