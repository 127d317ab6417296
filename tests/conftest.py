"""
Shared pytest fixtures for the Task Manager test suite.

This module contains fixtures that are shared across all test modules.
Fixtures follow the Arrange-Act-Assert (AAA) pattern and ensure
test isolation by providing fresh data for each test.

Key Concepts Demonstrated:
- Fixture scopes (function, session)
- Fixture dependencies
- Test data factories
- Database setup/teardown
- Test client creation
"""

import os
import pytest
from typing import Any
from faker import Faker

# Set testing environment before importing app
os.environ["FLASK_ENV"] = "testing"

from task_manager import create_app, db
from task_manager.models import Task, TaskStatus


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
    for all tests; the in-memory database is reset per test by
    the db_session fixture.

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
    1. Creating all tables before the test
    2. Providing a clean database session
    3. Dropping all tables after the test

    Args:
        app: Flask application fixture.

    Yields:
        Flask-SQLAlchemy extension bound to an active app context.
    """
    with app.app_context():
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def task_factory(db_session):
    """
    Factory fixture for creating Task rows directly in the store.

    Example:
        def test_something(task_factory):
            task = task_factory(title="My Task")
            assert task.id is not None
    """

    def _create_task(
        title: str | None = None,
        description: str | None = None,
        status: str = TaskStatus.PENDING.value,
    ) -> Task:
        """
        Create a task with the given or default values.

        Args:
            title: Task title (defaults to random sentence).
            description: Task description (defaults to random paragraph).
            status: Task status (defaults to pending).

        Returns:
            Created Task instance with an ID.
        """
        task = Task(
            title=title or fake.sentence(nb_words=4),
            description=description or fake.paragraph(),
            status=status,
        )
        db_session.session.add(task)
        db_session.session.commit()
        return task

    return _create_task


@pytest.fixture
def sample_task(task_factory) -> Task:
    """Create a single pending task."""
    return task_factory(
        title="Sample Task",
        description="This is a sample task for testing",
        status=TaskStatus.PENDING.value,
    )


@pytest.fixture
def multiple_tasks(task_factory) -> list[Task]:
    """
    Create tasks with different statuses and searchable text.

    "report" appears in the first title and the last description;
    "foo" appears (in different cases) in the second and third.
    """
    return [
        task_factory(
            title="Write quarterly report",
            description="Summarise revenue for Q3",
            status=TaskStatus.PENDING.value,
        ),
        task_factory(
            title="Fix login bug",
            description="Users cannot sign in with FOO accounts",
            status=TaskStatus.IN_PROGRESS.value,
        ),
        task_factory(
            title="Buy groceries",
            description="Milk, eggs and foo bars",
            status=TaskStatus.COMPLETED.value,
        ),
        task_factory(
            title="Review pull request",
            description="Check the report generator changes",
            status=TaskStatus.COMPLETED.value,
        ),
    ]


# -----------------------------------------------------------------------------
# Test Data Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def valid_task_data() -> dict[str, Any]:
    """Provide valid task data for POST requests."""
    return {
        "title": "Test Task",
        "description": "This is a test task description",
        "status": TaskStatus.IN_PROGRESS.value,
    }


@pytest.fixture
def minimal_task_data() -> dict[str, str]:
    """Provide minimal valid task data (only required fields)."""
    return {"title": "Minimal Task", "description": "Only the required fields"}


# -----------------------------------------------------------------------------
# API Helper Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def api_base_url() -> str:
    """Provide the base URL for API endpoints."""
    return "/v1"


@pytest.fixture
def api_headers() -> dict[str, str]:
    """Provide common headers for API requests."""
    return {
        "Content-Type": "application/json",
        "Accept": "application/json"
    }
