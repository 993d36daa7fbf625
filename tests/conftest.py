"""
Shared pytest fixtures for the Tasklist test suite.

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
from datetime import date, timedelta
from typing import Any
from faker import Faker

# Set testing environment before importing app
os.environ["FLASK_ENV"] = "testing"

from tasklist import create_app, db
from tasklist.models import Task
from tasklist.store import TaskStore


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
    for all tests, improving performance.

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

    Tables are dropped and recreated around every test so ids and
    rows never leak between tests.

    Args:
        app: Flask application fixture.

    Yields:
        Flask-SQLAlchemy extension bound to an active app context.
    """
    with app.app_context():
        db.drop_all()
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


@pytest.fixture
def store(db_session) -> TaskStore:
    """Provide a TaskStore bound to the test session."""
    return TaskStore(db_session.session)


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def task_factory(db_session):
    """
    Factory fixture for creating persisted Task instances.

    Example:
        def test_something(task_factory):
            task = task_factory(title="My Task")
            assert task.id is not None
    """

    def _create_task(
        title: str | None = None,
        description: str | None = None,
        completed: bool = False,
        due_date: date | None = None
    ) -> Task:
        task = Task(
            title=title or fake.sentence(nb_words=4),
            description=description or fake.paragraph(),
            completed=completed,
            due_date=due_date
        )
        db_session.session.add(task)
        db_session.session.commit()
        return task

    return _create_task


@pytest.fixture
def sample_task(task_factory) -> Task:
    """Create a single open task with a known title and due date."""
    return task_factory(
        title="Sample Task",
        description="This is a sample task for testing",
        completed=False,
        due_date=date(2025, 1, 1)
    )


@pytest.fixture
def multiple_tasks(task_factory) -> list[Task]:
    """
    Create tasks with mixed completion flags and due dates.

    Inserted out of due-date order, with one undated task, so that
    ordering tests have something to sort.

    Returns:
        List of Task instances in insertion order.
    """
    today = date.today()
    return [
        task_factory(title="Due in a week", completed=False, due_date=today + timedelta(days=7)),
        task_factory(title="No due date", completed=True, due_date=None),
        task_factory(title="Due tomorrow", completed=True, due_date=today + timedelta(days=1)),
        task_factory(title="Due yesterday", completed=False, due_date=today - timedelta(days=1)),
    ]


# -----------------------------------------------------------------------------
# Test Data Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def valid_task_data() -> dict[str, Any]:
    """Provide a complete task payload for POST/PUT requests."""
    return {
        "title": "New Task",
        "description": "New Description",
        "completed": False,
        "dueDate": "2025-01-01"
    }


@pytest.fixture
def api_headers() -> dict[str, str]:
    """Provide common headers for API requests."""
    return {
        "Content-Type": "application/json",
        "Accept": "application/json"
    }
