"""Shared test fixtures."""

import json
from uuid import UUID, uuid4

import httpx
import pytest
import respx
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from cockpit.core.config import settings
from cockpit.core.database import get_session
from cockpit.core.scheduler import get_generation_queue
from cockpit.launch.client import (
    GitHubClient,
    LLMClient,
    get_github_client,
    get_http_client,
    get_llm_client,
)
from cockpit.main import app
from cockpit.models import ChecklistItem, Project, ProjectStatus

API_TOKEN = "test-api-token"
SERVICE_TOKEN = "test-service-token"
LLM_BASE_URL = "https://llm.test/v1"
GITHUB_BASE_URL = "https://github.test"


class RecordingQueue:
    """Generation queue that only remembers what was enqueued."""

    def __init__(self):
        self.enqueued: list[UUID] = []

    def enqueue(self, project_id: UUID) -> None:
        self.enqueued.append(project_id)


@pytest.fixture(autouse=True)
def configured_settings(monkeypatch):
    """Give every test known tokens and keys."""
    monkeypatch.setattr(settings, "api_token", API_TOKEN)
    monkeypatch.setattr(settings, "generation_service_token", SERVICE_TOKEN)
    monkeypatch.setattr(settings, "openai_api_key", "test-openai-key")
    monkeypatch.setattr(settings, "github_token", "test-github-token")
    return settings


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Create a new database session for each test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="mock_http")
def mock_http_fixture():
    """Intercept every outbound httpx request made during the test."""
    with respx.mock(assert_all_called=False) as mock:
        yield mock


@pytest.fixture(name="llm_client")
def llm_client_fixture():
    with LLMClient(api_key="test-openai-key", model="gpt-3.5-turbo", base_url=LLM_BASE_URL) as client:
        yield client


@pytest.fixture(name="github_client")
def github_client_fixture():
    with GitHubClient(token="test-github-token", base_url=GITHUB_BASE_URL) as client:
        yield client


@pytest.fixture(name="http_client")
def http_client_fixture():
    client = httpx.Client(timeout=10.0, follow_redirects=True)
    yield client
    client.close()


@pytest.fixture(name="llm_api")
def llm_api_fixture(mock_http):
    """Route for the chat completions endpoint; tests set its response."""
    return mock_http.post(f"{LLM_BASE_URL}/chat/completions")


@pytest.fixture(name="tool_call_response")
def tool_call_response_fixture():
    """Build a chat completions response carrying a recommend_next_tasks call."""

    def build(arguments) -> httpx.Response:
        if not isinstance(arguments, str):
            arguments = json.dumps(arguments)
        return httpx.Response(
            200,
            json={
                "id": "chatcmpl-test",
                "choices": [
                    {
                        "index": 0,
                        "message": {
                            "role": "assistant",
                            "content": None,
                            "tool_calls": [
                                {
                                    "id": "call_1",
                                    "type": "function",
                                    "function": {
                                        "name": "recommend_next_tasks",
                                        "arguments": arguments,
                                    },
                                }
                            ],
                        },
                        "finish_reason": "stop",
                    }
                ],
            },
        )

    return build


@pytest.fixture(name="generation_queue")
def generation_queue_fixture() -> RecordingQueue:
    return RecordingQueue()


@pytest.fixture(name="client")
def client_fixture(
    session: Session,
    generation_queue: RecordingQueue,
    llm_client: LLMClient,
    github_client: GitHubClient,
    http_client: httpx.Client,
    mock_http,
):
    """Create an authenticated test client with the test database and clients."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_generation_queue] = lambda: generation_queue
    app.dependency_overrides[get_llm_client] = lambda: llm_client
    app.dependency_overrides[get_github_client] = lambda: github_client
    app.dependency_overrides[get_http_client] = lambda: http_client
    client = TestClient(app, headers={"Authorization": f"Bearer {API_TOKEN}"})
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="sample_project")
def sample_project_fixture(session: Session) -> Project:
    """Create a project still in design."""
    project = Project(
        id=uuid4(),
        name="Acme",
        description="A tool",
        status=ProjectStatus.DESIGN,
    )
    session.add(project)
    session.commit()
    session.refresh(project)
    return project


@pytest.fixture(name="launching_project")
def launching_project_fixture(session: Session) -> Project:
    """Create a project in prep_launch with a website and repository."""
    project = Project(
        id=uuid4(),
        name="Launchpad",
        description="Landing page builder for indie hackers",
        frontend_url="https://launchpad.example.com",
        github_repo="acme/launchpad",
        status=ProjectStatus.PREP_LAUNCH,
    )
    session.add(project)
    session.commit()
    session.refresh(project)
    return project


@pytest.fixture(name="project_with_items")
def project_with_items_fixture(session: Session) -> Project:
    """Create a prep_launch project with a three-item checklist."""
    project = Project(
        id=uuid4(),
        name="Checklisted",
        description="Has a checklist already",
        status=ProjectStatus.PREP_LAUNCH,
    )
    session.add(project)
    session.flush()

    items = [
        ChecklistItem(project_id=project.id, title="Define personas", ai_help_hint="Know the user", order=0),
        ChecklistItem(project_id=project.id, title="Build waitlist", ai_help_hint="Capture demand", order=1),
        ChecklistItem(project_id=project.id, title="Set up analytics", order=2, is_complete=True),
    ]
    for item in items:
        session.add(item)

    session.commit()
    session.refresh(project)
    return project
