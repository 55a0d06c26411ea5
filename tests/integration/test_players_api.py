"""
API tests for /players and /health
"""

import pytest


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["database"] == "connected"
        assert body["scheduler"] == "disabled"

    @pytest.mark.asyncio
    async def test_root(self, client):
        response = await client.get("/")
        assert response.json()["name"] == "WordQuest Leaderboards API"


class TestRegistration:

    @pytest.mark.asyncio
    async def test_create_player_returns_token(self, client):
        response = await client.post("/players", json={"name": "Mia"})

        assert response.status_code == 201
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["player"]["name"] == "Mia"
        assert body["player"]["normalized_score"] is None

        me = await client.get(
            "/players/me",
            headers={"Authorization": f"Bearer {body['access_token']}"}
        )
        assert me.status_code == 200
        assert me.json()["id"] == body["player"]["id"]

    @pytest.mark.asyncio
    async def test_empty_name(self, client):
        response = await client.post("/players", json={"name": ""})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_me_requires_token(self, client):
        response = await client.get("/players/me")
        assert response.status_code in (401, 403)

    @pytest.mark.asyncio
    async def test_me_bad_token(self, client):
        response = await client.get("/players/me", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_token_for_deleted_player(self, client, auth_headers):
        response = await client.get("/players/me", headers=auth_headers("ghost"))
        assert response.status_code == 401


class TestProfile:

    @pytest.mark.asyncio
    async def test_profile_setup(self, client, make_player, auth_headers, sample_profile_setup):
        await make_player(
            "p1",
            total_stars=3,
            words_learned=5,
            quests_completed=10,
            normalized_score=None,
            age_group=None,
        )

        response = await client.post(
            "/players/me/profile/setup",
            json=sample_profile_setup,
            headers=auth_headers("p1")
        )

        assert response.status_code == 200
        body = response.json()
        assert body["age_group"] == "6-8"
        assert body["normalized_score"] == 693
        assert body["profile_completed"] is True

    @pytest.mark.asyncio
    async def test_profile_setup_invalid_language(self, client, make_player, auth_headers, sample_profile_setup):
        await make_player("p1")
        sample_profile_setup["native_language"] = "fr"

        response = await client.post(
            "/players/me/profile/setup",
            json=sample_profile_setup,
            headers=auth_headers("p1")
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_profile_setup_twice(self, client, make_player, auth_headers, sample_profile_setup):
        await make_player("p1", profile_completed=True, total_raw_score=900)

        response = await client.post(
            "/players/me/profile/setup",
            json=sample_profile_setup,
            headers=auth_headers("p1")
        )

        assert response.status_code == 400
        me = await client.get("/players/me", headers=auth_headers("p1"))
        assert me.json()["total_raw_score"] == 900

    @pytest.mark.asyncio
    async def test_patch_profile(self, client, make_player, auth_headers):
        await make_player("p1", competition_opt_in=False, display_name=None)

        response = await client.patch(
            "/players/me/profile",
            json={"competition_opt_in": True, "grade_level": 4},
            headers=auth_headers("p1")
        )

        assert response.status_code == 200
        assert response.json()["competition_opt_in"] is True
        assert response.json()["display_name"]

    @pytest.mark.asyncio
    async def test_regenerate_display_name(self, client, make_player, auth_headers):
        await make_player("p1")

        response = await client.post("/players/me/display-name", headers=auth_headers("p1"))

        assert response.status_code == 200
        assert response.json()["display_name"]


class TestGameResults:

    @pytest.mark.asyncio
    async def test_record_result(self, client, make_player, auth_headers):
        await make_player("p1", age_group="6-8", total_raw_score=100)

        response = await client.post(
            "/players/me/results",
            json={"raw_score_to_add": 100, "accuracy": 95, "questions_answered": 20},
            headers=auth_headers("p1")
        )

        assert response.status_code == 200
        assert response.json() == {"normalized_score": 432, "raw_score": 200}

    @pytest.mark.asyncio
    async def test_accuracy_out_of_range(self, client, make_player, auth_headers):
        await make_player("p1")

        response = await client.post(
            "/players/me/results",
            json={"raw_score_to_add": 10, "accuracy": 150, "questions_answered": 1},
            headers=auth_headers("p1")
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_comparison(self, client, make_player, auth_headers):
        await make_player("p1", age_group="9-11", normalized_score=80)
        await make_player("p2", age_group="9-11", normalized_score=40)

        response = await client.get("/players/me/comparison", headers=auth_headers("p1"))

        assert response.status_code == 200
        assert response.json()["comparison"]["percentile"] == 50
