"""
Favorite endpoint tests: listing, per-user listing, add with duplicate
detection, and removal.
"""

from unittest.mock import AsyncMock

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

USER = "ada@example.com"


class TestAddFavorite:

    @pytest.mark.asyncio
    async def test_add_favorite_returns_201_with_document(self, test_client, fake_store):
        movie_id = str(ObjectId())
        response = await test_client.post(
            "/favorites", json={"movieId": movie_id, "userEmail": USER, "title": "Dune"}
        )
        assert response.status_code == 201
        body = response.json()
        assert body["acknowledged"] is True
        assert body["favorite"]["movieId"] == movie_id
        assert body["favorite"]["userEmail"] == USER
        assert body["favorite"]["title"] == "Dune"
        assert body["favorite"]["_id"] == body["insertedId"]
        assert len(fake_store.favorites.documents) == 1

    @pytest.mark.asyncio
    async def test_movie_document_id_becomes_movie_id(self, test_client, fake_store):
        movie_id = str(ObjectId())
        response = await test_client.post(
            "/favorites", json={"_id": movie_id, "userEmail": USER, "title": "Dune"}
        )
        assert response.status_code == 201
        favorite = response.json()["favorite"]
        assert favorite["movieId"] == movie_id
        assert favorite["_id"] != movie_id

    @pytest.mark.asyncio
    async def test_duplicate_favorite_returns_409(self, test_client, fake_store):
        payload = {"movieId": "m1", "userEmail": USER}
        first = await test_client.post("/favorites", json=payload)
        second = await test_client.post("/favorites", json=payload)
        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json()["success"] is False
        assert len(fake_store.favorites.documents) == 1

    @pytest.mark.asyncio
    async def test_same_movie_for_different_users_allowed(self, test_client, fake_store):
        first = await test_client.post("/favorites", json={"movieId": "m1", "userEmail": USER})
        second = await test_client.post("/favorites", json={"movieId": "m1", "userEmail": "bob@example.com"})
        assert first.status_code == 201
        assert second.status_code == 201
        assert len(fake_store.favorites.documents) == 2

    @pytest.mark.asyncio
    async def test_missing_body_returns_400(self, test_client):
        response = await test_client.post("/favorites")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_missing_user_email_returns_400(self, test_client):
        response = await test_client.post("/favorites", json={"movieId": "m1"})
        assert response.status_code == 400
        assert "userEmail" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_missing_identifier_returns_400(self, test_client):
        response = await test_client.post("/favorites", json={"userEmail": USER})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_non_object_body_returns_400(self, test_client, fake_store):
        response = await test_client.post("/favorites", json=[{"movieId": "m1", "userEmail": USER}])
        assert response.status_code == 400
        assert response.json()["success"] is False
        assert fake_store.favorites.documents == []

    @pytest.mark.asyncio
    async def test_object_movie_id_returns_400(self, test_client, fake_store):
        response = await test_client.post("/favorites", json={"movieId": {"a": 1}, "userEmail": USER})
        assert response.status_code == 400
        assert "movieId" in response.json()["message"]
        assert fake_store.favorites.documents == []

    @pytest.mark.asyncio
    async def test_store_failure_returns_500(self, test_client, fake_store):
        fake_store.favorites.find_one = AsyncMock(side_effect=ServerSelectionTimeoutError("down"))
        response = await test_client.post("/favorites", json={"movieId": "m1", "userEmail": USER})
        assert response.status_code == 500
        assert response.json()["message"] == "Internal server error."


class TestListFavorites:

    @pytest.mark.asyncio
    async def test_list_all(self, test_client):
        await test_client.post("/favorites", json={"movieId": "m1", "userEmail": USER})
        await test_client.post("/favorites", json={"movieId": "m2", "userEmail": "bob@example.com"})
        response = await test_client.get("/favorites")
        assert response.status_code == 200
        assert len(response.json()) == 2

    @pytest.mark.asyncio
    async def test_list_by_user(self, test_client):
        await test_client.post("/favorites", json={"movieId": "m1", "userEmail": USER})
        await test_client.post("/favorites", json={"movieId": "m2", "userEmail": USER})
        await test_client.post("/favorites", json={"movieId": "m1", "userEmail": "bob@example.com"})

        response = await test_client.get(f"/favorites/{USER}")
        assert response.status_code == 200
        body = response.json()
        assert {fav["movieId"] for fav in body} == {"m1", "m2"}
        assert all(fav["userEmail"] == USER for fav in body)

    @pytest.mark.asyncio
    async def test_unknown_user_returns_empty_list(self, test_client):
        response = await test_client.get("/favorites/nobody@example.com")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_blank_email_returns_400(self, test_client):
        response = await test_client.get("/favorites/%20")
        assert response.status_code == 400
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_empty_email_segment_returns_400(self, test_client):
        response = await test_client.get("/favorites/", follow_redirects=False)
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "A user email is required."}


class TestRemoveFavorite:

    @pytest.mark.asyncio
    async def test_remove_favorite(self, test_client, fake_store):
        await test_client.post("/favorites", json={"movieId": "m1", "userEmail": USER})
        response = await test_client.delete("/favorites/m1", params={"email": USER})
        assert response.status_code == 200
        assert response.json() == {"success": True, "deletedCount": 1}
        assert fake_store.favorites.documents == []

    @pytest.mark.asyncio
    async def test_remove_only_affects_that_user(self, test_client, fake_store):
        await test_client.post("/favorites", json={"movieId": "m1", "userEmail": USER})
        await test_client.post("/favorites", json={"movieId": "m1", "userEmail": "bob@example.com"})
        await test_client.delete("/favorites/m1", params={"email": USER})
        assert [fav["userEmail"] for fav in fake_store.favorites.documents] == ["bob@example.com"]

    @pytest.mark.asyncio
    async def test_remove_missing_returns_404(self, test_client):
        response = await test_client.delete("/favorites/m1", params={"email": USER})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_remove_without_email_returns_400(self, test_client):
        response = await test_client.delete("/favorites/m1")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_remove_store_failure_returns_500(self, test_client, fake_store):
        fake_store.favorites.delete_one = AsyncMock(side_effect=ServerSelectionTimeoutError("down"))
        response = await test_client.delete("/favorites/m1", params={"email": USER})
        assert response.status_code == 500
