from datetime import datetime, UTC
import pytest
from fastapi import status
from socialblog.models.comment import Comment

@pytest.fixture
def test_comment_data():
    return {
        "content": "Test comment"
    }

class TestCommentCreation:
    def test_create_comment(self, client, signup, create_post, test_comment_data):
        """测试创建评论"""
        _, alice = signup("alice")
        bob_user, bob = signup("bob")
        post = create_post(alice)

        response = client.post(f"/api/posts/{post['id']}/comments", headers=bob, json=test_comment_data)
        assert response.status_code == status.HTTP_200_OK
        comment = response.json()["comment"]
        assert comment["content"] == test_comment_data["content"]
        assert comment["author"] == {"id": bob_user["id"], "name": "bob"}
        assert "created_at" in comment

    def test_create_comment_unauthorized(self, client, signup, create_post, test_comment_data):
        """测试未认证用户创建评论"""
        _, alice = signup("alice")
        post = create_post(alice)
        response = client.post(f"/api/posts/{post['id']}/comments", json=test_comment_data)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_comment_on_hidden_post(self, client, signup, create_post, test_comment_data):
        """不能评论看不到的文章"""
        _, alice = signup("alice")
        _, bob = signup("bob")
        private = create_post(alice, visibility="private")

        response = client.post(f"/api/posts/{private['id']}/comments", headers=bob, json=test_comment_data)
        assert response.status_code == status.HTTP_404_NOT_FOUND

        # the owner can still comment on their own private post
        response = client.post(f"/api/posts/{private['id']}/comments", headers=alice, json=test_comment_data)
        assert response.status_code == status.HTTP_200_OK

    def test_comment_on_missing_post(self, client, signup, test_comment_data):
        _, alice = signup("alice")
        response = client.post("/api/posts/9999/comments", headers=alice, json=test_comment_data)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_empty_comment(self, client, signup, create_post):
        """空评论返回 400"""
        _, alice = signup("alice")
        post = create_post(alice)
        response = client.post(f"/api/posts/{post['id']}/comments", headers=alice, json={"content": ""})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

class TestCommentsInFeed:
    def test_comments_oldest_first(self, client, signup, create_post):
        """文章中的评论按创建时间正序"""
        _, alice = signup("alice")
        _, bob = signup("bob")
        post = create_post(alice)
        for content, headers in [("one", bob), ("two", alice), ("three", bob)]:
            client.post(f"/api/posts/{post['id']}/comments", headers=headers, json={"content": content})

        fetched = client.get("/api/posts").json()["posts"][0]
        assert [c["content"] for c in fetched["comments"]] == ["one", "two", "three"]
        assert [c["author"]["name"] for c in fetched["comments"]] == ["bob", "alice", "bob"]
        assert fetched["comments_count"] == 3

    def test_equal_timestamps_oldest_id_first(self, client, db_session, signup, create_post):
        """创建时间相同时按 ID 正序"""
        alice_user, alice = signup("alice")
        post = create_post(alice)
        stamp = datetime(2024, 1, 1, tzinfo=UTC)
        for content in ["c1", "c2", "c3"]:
            db_session.add(Comment(post_id=post["id"], user_id=alice_user["id"], content=content, created_at=stamp))
            db_session.flush()
        db_session.commit()

        fetched = client.get(f"/api/posts/{post['id']}").json()["post"]
        assert [c["content"] for c in fetched["comments"]] == ["c1", "c2", "c3"]
