"""회원/팀 API 테스트.

Member and Team API tests — creation, validation errors and dynamic search
through the HTTP layer.
"""

from httpx import AsyncClient

TEAMS_URL = "/api/v1/teams"
MEMBERS_URL = "/api/v1/members"
SEARCH_URL = f"{MEMBERS_URL}/search"


class TestHealth:
    async def test_health(self, client: AsyncClient):
        res = await client.get("/health")
        assert res.status_code == 200
        assert res.json() == {"status": "ok"}


class TestTeamApi:
    """팀 API 테스트."""

    async def test_create_team(self, client: AsyncClient):
        res = await client.post(TEAMS_URL, json={"name": "teamC"})
        assert res.status_code == 201
        assert res.json()["name"] == "teamC"

    async def test_create_duplicate_team(self, client: AsyncClient, teams):
        res = await client.post(TEAMS_URL, json={"name": "teamA"})
        assert res.status_code == 409

    async def test_create_team_empty_name(self, client: AsyncClient):
        res = await client.post(TEAMS_URL, json={"name": ""})
        assert res.status_code == 422

    async def test_list_teams(self, client: AsyncClient, teams):
        res = await client.get(TEAMS_URL)
        assert res.status_code == 200
        assert [t["name"] for t in res.json()] == ["teamA", "teamB"]


class TestMemberCreate:
    """회원 생성 API 테스트."""

    async def test_create_member_with_team(self, client: AsyncClient, teams):
        res = await client.post(MEMBERS_URL, json={
            "username": "member9",
            "age": 0,
            "team_name": "teamB",
        })
        assert res.status_code == 201
        data = res.json()
        assert data["age"] == 0
        assert data["team_name"] == "teamB"
        assert data["team_id"] == str(teams["teamB"].id)

    async def test_create_member_without_team(self, client: AsyncClient):
        res = await client.post(MEMBERS_URL, json={"username": "solo", "age": 5})
        assert res.status_code == 201
        assert res.json()["team_id"] is None

    async def test_create_member_unknown_team(self, client: AsyncClient, teams):
        res = await client.post(MEMBERS_URL, json={
            "username": "ghost",
            "age": 1,
            "team_name": "teamZ",
        })
        assert res.status_code == 404

    async def test_create_member_negative_age(self, client: AsyncClient):
        res = await client.post(MEMBERS_URL, json={"username": "x", "age": -1})
        assert res.status_code == 422


class TestMemberSearch:
    """회원 검색 API 테스트."""

    async def test_search_without_params_returns_all(self, client: AsyncClient, members):
        res = await client.get(SEARCH_URL)
        assert res.status_code == 200
        assert [m["username"] for m in res.json()] == [
            "member1", "member2", "member3", "member4",
        ]

    async def test_search_username_and_age(self, client: AsyncClient, members):
        res = await client.get(SEARCH_URL, params={"username": "member1", "age": 10})
        assert res.status_code == 200
        data = res.json()
        assert len(data) == 1
        assert data[0]["team_name"] == "teamA"

    async def test_search_age_zero(self, client: AsyncClient, members):
        """age=0은 필터로 적용된다."""
        await client.post(MEMBERS_URL, json={"username": "baby", "age": 0})
        res = await client.get(SEARCH_URL, params={"age": 0})
        assert [m["username"] for m in res.json()] == ["baby"]

    async def test_search_by_team(self, client: AsyncClient, members):
        res = await client.get(SEARCH_URL, params={"team_name": "teamB", "age_loe": 30})
        assert [m["username"] for m in res.json()] == ["member3"]

    async def test_search_inverted_age_range(self, client: AsyncClient, members):
        res = await client.get(SEARCH_URL, params={"age_goe": 30, "age_loe": 20})
        assert res.status_code == 400

    async def test_search_page(self, client: AsyncClient, members):
        res = await client.get(f"{SEARCH_URL}/page", params={"per_page": 3, "page": 1})
        assert res.status_code == 200
        data = res.json()
        assert data["total"] == 4
        assert data["pages"] == 2
        assert len(data["items"]) == 3

    async def test_search_page_invalid_page(self, client: AsyncClient):
        res = await client.get(f"{SEARCH_URL}/page", params={"page": 0})
        assert res.status_code == 422


class TestMemberStats:
    """통계성 조회 API 테스트."""

    async def test_older_than_average(self, client: AsyncClient, members):
        res = await client.get(f"{MEMBERS_URL}/stats/older-than-average")
        assert res.status_code == 200
        assert res.json() == [
            {"username": "member3", "age": 30},
            {"username": "member4", "age": 40},
        ]

    async def test_age_bands(self, client: AsyncClient, members):
        res = await client.get(f"{MEMBERS_URL}/stats/age-bands")
        assert res.status_code == 200
        assert res.json() == ["0~20살", "0~20살", "21~30살", "기타"]
