"""
Shared pytest fixtures for the Task Manager test suite.

This module contains fixtures that are shared across all test modules.
Fixtures follow the Arrange-Act-Assert (AAA) pattern and ensure
test isolation by providing fresh data for each test.

Key Concepts Demonstrated:
- Fixture scopes (function, session)
- Fixture dependencies
- Test data factories
- Database setup/teardown through the explicit schema step
- Test client creation
"""

import os
import pytest
from typing import Any
from faker import Faker

# Set testing environment before importing app
os.environ["FLASK_ENV"] = "testing"

from taskmanager import create_app, db
from taskmanager.cli import init_db
from taskmanager.models import Task


# Initialize Faker for generating test data
fake = Faker()


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def app():
    """
    Create application instance for the test session.

    The 'session' scope means the same app instance is reused
    for all tests. The testing config points at an in-memory SQLite
    database, and the schema is only created by ``db_session``.

    Yields:
        Flask application instance configured for testing.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """
    Create a test client for making HTTP requests.

    Args:
        app: Flask application fixture.

    Yields:
        Flask test client for making HTTP requests.
    """
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(app):
    """
    Create a fresh database for each test.

    This fixture ensures test isolation by:
    1. Creating all tables before the test (same code path as ``flask init-db``)
    2. Providing the database extension
    3. Rolling back and dropping all tables after the test

    Args:
        app: Flask application fixture.

    Yields:
        Flask-SQLAlchemy extension bound to the test app.
    """
    with app.app_context():
        init_db()
        yield db
        db.session.rollback()
        db.drop_all()


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def task_factory(db_session):
    """
    Factory fixture for creating Task instances.

    Example:
        def test_something(task_factory):
            task = task_factory(title="My Task")
            assert task.id is not None
    """

    def _create_task(
        title: str | None = None,
        description: str | None = None,
        completed: bool = False
    ) -> Task:
        """
        Create a task with the given or default values.

        Args:
            title: Task title (defaults to random sentence).
            description: Task description (defaults to random paragraph).
            completed: Completion flag (defaults to False).

        Returns:
            Created Task instance with an ID.
        """
        task = Task(
            title=title or fake.sentence(nb_words=4),
            description=description or fake.paragraph(),
            completed=completed
        )
        db_session.session.add(task)
        db_session.session.commit()
        return task

    return _create_task


@pytest.fixture
def sample_task(task_factory) -> Task:
    """
    Create a single sample task for tests that need one task.

    Returns:
        A single Task instance.
    """
    return task_factory(
        title="Sample Task",
        description="This is a sample task for testing",
        completed=False
    )


@pytest.fixture
def multiple_tasks(task_factory) -> list[Task]:
    """
    Create multiple tasks with mixed completion flags.

    Returns:
        List of four Task instances, two of them completed.
    """
    return [
        task_factory(title="Write report", completed=False),
        task_factory(title="Review pull request", completed=True),
        task_factory(title="Plan sprint", completed=False),
        task_factory(title="Fix login bug", completed=True),
    ]


# -----------------------------------------------------------------------------
# Test Data Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def valid_task_data() -> dict[str, Any]:
    """
    Provide valid task data for POST/PUT requests.

    Returns:
        Dictionary with valid task field values.
    """
    return {
        "title": "Test Task",
        "description": "This is a test task description",
        "completed": False
    }


@pytest.fixture
def minimal_task_data() -> dict[str, str]:
    """
    Provide minimal valid task data (only required fields).

    Returns:
        Dictionary with only required fields.
    """
    return {"title": "Minimal Task"}


# -----------------------------------------------------------------------------
# API Helper Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def api_headers() -> dict[str, str]:
    """
    Provide common headers for API requests.

    Returns:
        Dictionary of HTTP headers.
    """
    return {
        "Content-Type": "application/json",
        "Accept": "application/json"
    }
