"""FastAPI application builder with dependency injection and lifecycle management."""

import contextlib
import logging
import typing

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from api import dependencies
from api.error_handlers import register_error_handlers
from config import Settings
from infrastructure.database import DatabaseManager
from logic.users import UserService
from repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

API_TITLE = "Votify Sessions API"
API_VERSION = "0.1.0"


def configure_logging(level: str) -> None:
    """Configure root logging for the service."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def include_routers(app: FastAPI, settings: Settings) -> None:
    """Include all API routers.

    Args:
        app: FastAPI application instance
        settings: Application settings (provides the API version prefix)
    """
    from api.routers.health import router as health_router
    from api.routers.sessions import router as sessions_router

    app.include_router(health_router)
    app.include_router(sessions_router, prefix=f"/api/{settings.api_version}")


class AppBuilder:
    """Application builder with dependency injection and lifecycle management.

    This class follows the builder pattern and manages:
    - Application configuration
    - Database connection lifecycle
    - Bootstrap admin account
    - Exception handlers
    - Dependency injection setup
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the application builder.

        Args:
            settings: Settings to use; loaded from the environment when omitted
        """
        from config import get_settings

        self.settings = settings or get_settings()
        configure_logging(self.settings.app_log_level)

        # Async resources (initialized in startup)
        self._database: DatabaseManager | None = None
        self._session_maker: async_sessionmaker[AsyncSession] | None = None

        # Create FastAPI application
        self.app: FastAPI = FastAPI(
            title=API_TITLE,
            description="CRUD API for voting sessions",
            version=API_VERSION,
            debug=self.settings.app_log_level == "DEBUG",
            lifespan=self.lifespan_manager,
            docs_url="/docs",
            redoc_url="/redoc",
            openapi_url="/openapi.json",
        )

        # Configure middleware
        self._configure_middleware()

        # Configure exception handlers
        register_error_handlers(self.app)

        # Override dependencies with actual instances
        self._setup_dependency_overrides()

        # Include routers
        include_routers(self.app, self.settings)

        # Add root endpoint
        self._add_root_endpoint()

    def _configure_middleware(self) -> None:
        """Configure FastAPI middleware."""
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=self.settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def _setup_dependency_overrides(self) -> None:
        """Set up dependency injection overrides."""
        self.app.dependency_overrides[dependencies.get_settings] = self._get_settings
        self.app.dependency_overrides[dependencies.get_db] = self._get_db

    def _add_root_endpoint(self) -> None:
        """Add root API endpoint."""
        sessions_path = f"/api/{self.settings.api_version}/sessions"

        @self.app.get("/", tags=["root"])
        async def root() -> dict[str, str]:
            """Root endpoint with API information."""
            return {
                "name": API_TITLE,
                "version": API_VERSION,
                "docs": "/docs",
                "health": "/health",
                "sessions": sessions_path,
            }

    def _get_settings(self) -> Settings:
        """Dependency override for settings.

        Returns:
            Settings: Application settings instance
        """
        return self.settings

    def _get_db(self) -> async_sessionmaker[AsyncSession]:
        """Dependency override for database session maker.

        Returns:
            async_sessionmaker: Database session maker

        Raises:
            RuntimeError: If session maker not initialized
        """
        if self._session_maker is None:
            raise RuntimeError("Database session maker not initialized")
        return self._session_maker

    async def init_async_resources(self) -> None:
        """Initialize the database and the bootstrap admin."""
        logger.info(f"Starting {API_TITLE} v{API_VERSION}")
        logger.info(f"Log level: {self.settings.app_log_level}")
        logger.info(f"Serving sessions under /api/{self.settings.api_version}")

        self._database = DatabaseManager(
            self.settings.database_url,
            echo=self.settings.app_log_level == "DEBUG",
        )
        if self.settings.database_create_tables:
            await self._database.create_tables()
        self._session_maker = self._database.async_session_maker

        if self.settings.admin_api_token:
            user_service = UserService(self._session_maker, UserRepository())
            await user_service.ensure_admin(
                name=self.settings.admin_name,
                email=self.settings.admin_email,
                api_token=self.settings.admin_api_token,
            )

    async def tear_down(self) -> None:
        """Clean up async resources."""
        logger.info(f"Shutting down {API_TITLE}")

        if self._database is not None:
            await self._database.close()

        logger.info("Cleanup completed")

    @contextlib.asynccontextmanager
    async def lifespan_manager(
        self, _: FastAPI
    ) -> typing.AsyncIterator[dict[str, typing.Any]]:
        """Lifespan context manager for FastAPI application.

        Args:
            _: FastAPI application instance (unused)

        Yields:
            dict: Lifespan state (empty dict)
        """
        try:
            await self.init_async_resources()
            yield {}
        finally:
            await self.tear_down()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings override

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    return AppBuilder(settings).app
