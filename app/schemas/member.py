"""회원 및 팀 관련 Pydantic 요청/응답 스키마 정의.

Member and Team Pydantic request/response schema definitions.
Includes the member search condition and the DTO projections
returned by member queries.
"""

from datetime import datetime
from pydantic import BaseModel, Field


# === 팀 (Team) 스키마 ===

class TeamCreate(BaseModel):
    """팀 생성 요청 스키마.

    Team creation request schema.

    Attributes:
        name: 팀 이름 (Team name, globally unique)
    """

    name: str = Field(min_length=1, max_length=100)


class TeamResponse(BaseModel):
    """팀 응답 스키마."""

    id: str
    name: str
    created_at: datetime


# === 회원 (Member) 스키마 ===

class MemberCreate(BaseModel):
    """회원 생성 요청 스키마.

    Member creation request schema.
    The team is referenced by name; omitting it creates a member without a team.

    Attributes:
        username: 회원 이름 (Username)
        age: 나이 (Age, 0 allowed)
        team_name: 소속 팀 이름 (Team name, optional)
    """

    username: str = Field(min_length=1, max_length=100)
    age: int = Field(default=0, ge=0)
    team_name: str | None = None


class MemberResponse(BaseModel):
    """회원 응답 스키마."""

    id: str
    username: str
    age: int
    team_id: str | None = None
    team_name: str | None = None
    created_at: datetime


class MemberSearchCondition(BaseModel):
    """회원 검색 조건 — 모든 필드는 선택적.

    Member search condition. Every field is independently optional;
    None means "unspecified" and adds no constraint. Empty strings and 0
    are specified values.

    Attributes:
        username: 회원 이름 일치 (Exact username)
        team_name: 팀 이름 일치 (Exact team name)
        age: 나이 일치 (Exact age)
        age_goe: 최소 나이, 이상 (Minimum age, inclusive)
        age_loe: 최대 나이, 이하 (Maximum age, inclusive)
    """

    username: str | None = None
    team_name: str | None = None
    age: int | None = None
    age_goe: int | None = None
    age_loe: int | None = None


# === 조회 결과 DTO (Query projections) ===

class MemberDto(BaseModel):
    """회원 이름/나이 프로젝션 — Username and age projection."""

    username: str
    age: int


class UserDto(BaseModel):
    """별칭 프로젝션 — username을 name으로, age는 전체 최대 나이.

    Aliased projection: username as ``name`` and ``age`` from a subquery.
    """

    name: str
    age: int


class MemberTeamDto(BaseModel):
    """회원-팀 조인 프로젝션.

    Member joined with its (optional) team.

    Attributes:
        member_id: 회원 UUID (Member identifier)
        username: 회원 이름 (Username)
        age: 나이 (Age)
        team_id: 팀 UUID, 팀이 없으면 None (Team identifier or None)
        team_name: 팀 이름, 팀이 없으면 None (Team name or None)
    """

    member_id: str
    username: str
    age: int
    team_id: str | None = None
    team_name: str | None = None
