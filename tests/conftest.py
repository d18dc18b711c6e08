"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown (in-memory SQLite, fresh schema per test)
- FastAPI test client
- Seed companies, jobs and users plus their tokens
"""

import os

# Must be set before the app's settings are first imported
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
os.environ["BCRYPT_WORK_FACTOR"] = "4"

import pytest
from fastapi.testclient import TestClient

import jobly.models  # noqa: F401 - register tables on Base.metadata
from jobly.core.database import Base, SessionLocal, engine, get_db
from jobly.core.security import create_access_token
from jobly.crud import company as company_crud
from jobly.crud import job as job_crud
from jobly.crud import user as user_crud
from main import app


@pytest.fixture
def db_session():
    """
    Create a fresh database session for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seed(db_session):
    """
    Three companies, one job each (j3 without equity), three regular users
    and one admin. Returns the job ids in creation order.
    """
    for n in (1, 2, 3):
        company_crud.create(db_session, {
            "handle": f"c{n}",
            "name": f"C{n}",
            "description": f"Desc{n}",
            "numEmployees": n,
            "logoUrl": f"http://c{n}.img",
        })

    job_ids = []
    for n, equity in ((1, "0.1"), (2, "0.2"), (3, None)):
        job = job_crud.create(db_session, {
            "title": f"J{n}",
            "salary": n * 10000,
            "equity": equity,
            "companyHandle": f"c{n}",
        })
        job_ids.append(job["id"])

    for n in (1, 2, 3):
        user_crud.register(db_session, {
            "username": f"u{n}",
            "password": f"password{n}",
            "firstName": f"U{n}F",
            "lastName": f"U{n}L",
            "email": f"user{n}@user.com",
            "isAdmin": False,
        })

    user_crud.register(db_session, {
        "username": "admin",
        "password": "password-admin",
        "firstName": "AdminF",
        "lastName": "AdminL",
        "email": "admin@admin.com",
        "isAdmin": True,
    })

    return {"job_ids": job_ids}


@pytest.fixture
def user_headers():
    """Authorization header for the regular user u1"""
    return {"Authorization": f"Bearer {create_access_token('u1', is_admin=False)}"}


@pytest.fixture
def admin_headers():
    """Authorization header for the admin user"""
    return {"Authorization": f"Bearer {create_access_token('admin', is_admin=True)}"}
