import os

# 设置测试环境（必须在导入应用之前）
os.environ["APP_ENV"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text
from sqlalchemy.orm import sessionmaker
from socialblog.main import app
from socialblog.core.config import SQLITE_TEST_DB
from socialblog.db.database import Base, build_engine, get_session

# 测试数据库配置
test_engine = build_engine(SQLITE_TEST_DB)
TestSessionLocal = sessionmaker(bind=test_engine, autocommit=False, autoflush=False)

# 按依赖关系顺序删除
TABLES = ["post_tags", "comments", "subscriptions", "posts", "tags", "users"]


def _drop_tables():
    with test_engine.connect() as conn:
        for table in TABLES:
            conn.execute(text(f"DROP TABLE IF EXISTS {table}"))
        conn.commit()


@pytest.fixture(autouse=True)
def clean_db():
    """清理并重建测试数据库"""
    _drop_tables()
    Base.metadata.create_all(bind=test_engine)
    yield
    _drop_tables()


@pytest.fixture
def db_session(clean_db):
    """直接访问测试数据库的会话"""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(clean_db):
    """创建测试客户端"""
    test_session = TestSessionLocal()

    # 覆盖依赖
    def override_get_session():
        try:
            yield test_session
        finally:
            test_session.close()

    app.dependency_overrides[get_session] = override_get_session

    client = TestClient(app)
    yield client

    test_session.close()
    app.dependency_overrides.clear()


@pytest.fixture
def signup(client):
    """注册用户并返回 (user, auth headers)"""
    def _signup(username: str, password: str = "pw1"):
        response = client.post("/api/auth/signup", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        data = response.json()
        return data["user"], {"Authorization": f"Bearer {data['token']}"}
    return _signup


@pytest.fixture
def create_post(client):
    """以给定身份创建文章"""
    def _create_post(headers, title="Test Post", content="Test content", tags=None, visibility="public"):
        response = client.post(
            "/api/posts",
            headers=headers,
            json={"title": title, "content": content, "tags": tags or [], "visibility": visibility},
        )
        assert response.status_code == 200, response.text
        return response.json()["post"]
    return _create_post
