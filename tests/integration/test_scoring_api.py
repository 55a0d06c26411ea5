"""
API tests for answer points and challenge resolution
"""

import pytest


class TestAnswerPoints:

    @pytest.mark.asyncio
    async def test_points(self, client):
        response = await client.post(
            "/scoring/answer-points",
            json={"difficulty": 3, "time_spent_ms": 0, "streak_bonus": 2.0}
        )

        assert response.status_code == 200
        assert response.json() == {"points": 420}

    @pytest.mark.asyncio
    async def test_default_time_limit(self, client):
        response = await client.post(
            "/scoring/answer-points",
            json={"difficulty": 1, "time_spent_ms": 30000}
        )

        assert response.json() == {"points": 100}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        {"difficulty": 0, "time_spent_ms": 0},
        {"difficulty": 4, "time_spent_ms": 0},
        {"difficulty": 1, "time_spent_ms": -1},
        {"difficulty": 1, "time_spent_ms": 0, "max_time_ms": 0},
        {"difficulty": 1, "time_spent_ms": 0, "streak_bonus": 2.5},
    ])
    async def test_out_of_range_rejected(self, client, payload):
        response = await client.post("/scoring/answer-points", json=payload)
        assert response.status_code == 422


class TestChallengeResolve:

    def _participant(self, player_id, **fields):
        data = {
            "player_id": player_id,
            "score": 100,
            "age_group": "12+",
            "accuracy": 50,
            "correct_answers": 0,
            "total_time": 1000,
        }
        data.update(fields)
        return data

    @pytest.mark.asyncio
    async def test_younger_player_wins(self, client):
        response = await client.post("/challenges/resolve", json={"participants": [
            self._participant("old", score=200),
            self._participant("young", score=150, age_group="6-8"),
        ]})

        assert response.status_code == 200
        assert response.json()["winner_id"] == "young"

    @pytest.mark.asyncio
    async def test_tie_goes_to_faster(self, client):
        response = await client.post("/challenges/resolve", json={"participants": [
            self._participant("slow", total_time=5000),
            self._participant("fast", total_time=3000),
        ]})

        assert response.json()["winner_id"] == "fast"

    @pytest.mark.asyncio
    async def test_empty(self, client):
        response = await client.post("/challenges/resolve", json={"participants": []})

        assert response.json() == {"winner_id": None, "scores": []}

    @pytest.mark.asyncio
    async def test_invalid_accuracy(self, client):
        response = await client.post("/challenges/resolve", json={"participants": [
            self._participant("a", accuracy=101),
        ]})

        assert response.status_code == 422
