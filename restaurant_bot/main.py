# Load environment variables FIRST, before any module imports that need them
from dotenv import load_dotenv
load_dotenv()

import argparse
import logging
from typing import Dict, Optional

from fastapi import FastAPI
from sqlalchemy.orm import sessionmaker

from . import config
from .db import create_session_factory
from .llm_client import GenerationClient, build_generation_client
from .logging_config import setup_logging
from .message_processor import MessageProcessor
from .routes import messages_router
from .tasks.composer import ResponseComposer
from .tasks.interpreter import UtteranceInterpreter
from .tasks.state_machine import DialogueStateMachine

# Configure logging at module load time
setup_logging()

logger = logging.getLogger(__name__)


def create_app(
    session_factory: Optional[sessionmaker] = None,
    llm: Optional[GenerationClient] = None,
    use_llm: bool = True,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        session_factory: Session factory for the conversation store. Built
                         from DATABASE_URL when not provided.
        llm: Generation client shared by the interpreter and the composer.
             Built from configuration when not provided and ``use_llm`` is set.
        use_llm: Set to False to run with deterministic parsing and fixed
                 replies only.

    Returns:
        Configured FastAPI application
    """
    if session_factory is None:
        session_factory = create_session_factory(config.DATABASE_URL)
    if llm is None and use_llm:
        llm = build_generation_client()

    processor = MessageProcessor(
        session_factory=session_factory,
        state_machine=DialogueStateMachine(UtteranceInterpreter(llm)),
        composer=ResponseComposer(llm),
    )

    app = FastAPI(
        title="Restaurant Order Bot API",
        description="Order-taking conversation engine for a restaurant WhatsApp line",
        version="1.0.0",
    )
    app.state.session_factory = session_factory
    app.state.processor = processor

    @app.get("/health", tags=["Health"])
    def health() -> Dict[str, str]:
        """Health check endpoint. Returns ok if the service is running."""
        return {"status": "ok"}

    app.include_router(messages_router)

    logger.info(
        "Restaurant bot ready (generation %s)",
        "enabled" if llm is not None else "disabled",
    )
    return app


def main():
    parser = argparse.ArgumentParser(description="Run the restaurant order bot")
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=8000,
        help="Port to run on (default: 8000)",
    )
    parser.add_argument(
        "--reload",
        "-r",
        action="store_true",
        help="Enable auto-reload for development",
    )
    args = parser.parse_args()

    import uvicorn

    uvicorn.run(
        "restaurant_bot.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
