"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.api.router import api_router
from src.config import settings
from src.db.turso import TursoClient
from src.importer.duplicate_checker import DuplicateChecker
from src.importer.preview_service import ImportPreviewService
from src.matching.classifier import CandidateClassifier
from src.matching.confidence import ConfidenceCombiner
from src.matching.misspellings import MisspellingDetector
from src.matching.nicknames import NicknameResolver
from src.repositories.leave_request_repo import LeaveRequestRepository
from src.repositories.roster_repo import RosterRepository

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def build_preview_service(
    roster_repo: RosterRepository,
    leave_request_repo: LeaveRequestRepository,
    nicknames: NicknameResolver,
) -> ImportPreviewService:
    """Wire the matching engine and stores into an ImportPreviewService."""
    combiner = ConfidenceCombiner(
        nicknames=nicknames,
        misspellings=MisspellingDetector(),
    )
    return ImportPreviewService(
        roster=roster_repo,
        classifier=CandidateClassifier(combiner),
        duplicate_checker=DuplicateChecker(leave_request_repo),
        max_concurrency=settings.import_max_concurrency,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan management.

    Startup:
    - Initialize database connection
    - Initialize roster and leave-request tables
    - Build the import preview service

    Shutdown:
    - Close database connection
    """
    logger.info(f"Starting {settings.app_name}...")

    db = TursoClient()
    await db.connect()
    app.state.db = db
    logger.info(f"Database connected: {db.url}")

    nicknames = NicknameResolver()
    roster_repo = RosterRepository(db, nicknames=nicknames)
    await roster_repo.initialize()
    leave_request_repo = LeaveRequestRepository(db)
    await leave_request_repo.initialize()
    app.state.roster_repo = roster_repo
    app.state.leave_request_repo = leave_request_repo
    logger.info("Repositories initialized")

    app.state.import_preview_service = build_preview_service(
        roster_repo, leave_request_repo, nicknames
    )
    logger.info("Import preview service initialized")

    yield

    logger.info(f"Shutting down {settings.app_name}...")
    await db.close()


app = FastAPI(
    title=settings.app_name,
    description="Name matching and reconciliation for leave calendar imports",
    version=settings.app_version,
    lifespan=lifespan,
)

app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
