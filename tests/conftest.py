import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from restaurant_bot.db import create_session_factory
from restaurant_bot.main import create_app
from restaurant_bot.message_processor import MessageProcessor, ProcessingContext
from restaurant_bot.models import MenuItem
from restaurant_bot.services.conversation import get_or_create_conversation
from restaurant_bot.tasks.composer import ResponseComposer
from restaurant_bot.tasks.interpreter import UtteranceInterpreter
from restaurant_bot.tasks.state_machine import DialogueStateMachine

from tests.test_helpers import TEST_ADDRESS


@pytest.fixture
def engine():
    """In-memory SQLite shared by every session through StaticPool."""
    return create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def empty_session_factory(engine):
    return create_session_factory(engine=engine)


@pytest.fixture
def session_factory(empty_session_factory):
    """Session factory over a seeded menu.

    Dishes 1-3 (3 has no category), drinks 4-5, and an inactive dish 6.
    """
    session = empty_session_factory()
    session.add_all([
        MenuItem(id=1, name="Feijoada", price=10.0, category="dish", active=True),
        MenuItem(id=2, name="Lasanha", price=15.0, category="dish", active=True),
        MenuItem(id=3, name="Parmegiana", price=20.0, category=None, active=True),
        MenuItem(id=4, name="Refrigerante", price=5.0, category="drink", active=True),
        MenuItem(id=5, name="Suco", price=7.5, category="drink", active=True),
        MenuItem(id=6, name="Prato antigo", price=99.0, category="dish", active=False),
    ])
    session.commit()
    session.close()
    return empty_session_factory


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def conversation(db):
    conv = get_or_create_conversation(db, TEST_ADDRESS)
    db.commit()
    return conv


@pytest.fixture
def machine():
    return DialogueStateMachine(UtteranceInterpreter())


@pytest.fixture
def processor(session_factory):
    """Template-only processor (no generation collaborator)."""
    return MessageProcessor(
        session_factory=session_factory,
        state_machine=DialogueStateMachine(UtteranceInterpreter()),
        composer=ResponseComposer(),
    )


@pytest.fixture
def say(processor):
    """Send one message from TEST_ADDRESS and return the ProcessingResult."""
    def _say(text, address=TEST_ADDRESS):
        return processor.process(ProcessingContext(channel_address=address, user_message=text))
    return _say


@pytest.fixture
def client(session_factory):
    """FastAPI TestClient over the seeded in-memory database, templates only."""
    app = create_app(session_factory=session_factory, use_llm=False)
    with TestClient(app) as c:
        yield c
