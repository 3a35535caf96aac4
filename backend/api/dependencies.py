"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.catalog.interfaces import ICatalogService
    from modules.ledger.interfaces import ILedgerService
    from modules.media.interfaces import IMediaService
    from modules.media.signer import KeySigner
    from modules.media.storage import ObjectStore
    from modules.ledger.payments import RazorpayGateway
    from modules.otp.interfaces import IMailer, IOtpService


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._auth_service: "IAuthService | None" = None
        self._otp_service: "IOtpService | None" = None
        self._object_store: "ObjectStore | None" = None
        self._signer: "KeySigner | None" = None
        self._media_service: "IMediaService | None" = None
        self._catalog_service: "ICatalogService | None" = None
        self._ledger_service: "ILedgerService | None" = None
        self._mailer: "IMailer | None" = None
        self._gateway: "RazorpayGateway | None" = None

    @property
    def ledger(self) -> "ILedgerService":
        """Get the progress and purchase ledger."""
        if self._ledger_service is None:
            from modules.ledger.payments import RazorpayGateway
            from modules.ledger.repository import LedgerRepository
            from modules.ledger.service import LedgerService
            from shared.config import get_settings
            from shared.database import get_supabase_client

            settings = get_settings()
            self._gateway = RazorpayGateway(
                key_id=settings.razorpay_key_id,
                key_secret=settings.razorpay_key_secret,
                api_url=settings.razorpay_api_url,
                currency=settings.payment_currency,
            )
            self._ledger_service = LedgerService(
                repository=LedgerRepository(get_supabase_client()),
                gateway=self._gateway,
            )
        return self._ledger_service

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(ledger=self.ledger)
        return self._auth_service

    @property
    def otp(self) -> "IOtpService":
        """Get the signup code service."""
        if self._otp_service is None:
            from modules.otp.mailer import BrevoMailer, ConsoleMailer
            from modules.otp.repository import OtpRepository
            from modules.otp.service import OtpService
            from shared.config import get_settings
            from shared.database import get_supabase_client

            settings = get_settings()
            if settings.email_configured:
                self._mailer = BrevoMailer(
                    api_key=settings.brevo_api_key,
                    sender_email=settings.sender_email,
                    sender_name=settings.sender_name,
                    api_url=settings.brevo_api_url,
                )
            else:
                self._mailer = ConsoleMailer()
            self._otp_service = OtpService(
                repository=OtpRepository(get_supabase_client(), settings.otp_ttl_seconds),
                auth=self.auth,
                mailer=self._mailer,
                settings=settings,
            )
        return self._otp_service

    @property
    def object_store(self) -> "ObjectStore":
        if self._object_store is None:
            from modules.media.storage import ObjectStore
            from shared.config import get_settings

            settings = get_settings()
            self._object_store = ObjectStore(
                bucket=settings.storage_bucket,
                chunk_size=settings.stream_chunk_size,
            )
        return self._object_store

    @property
    def signer(self) -> "KeySigner":
        if self._signer is None:
            from modules.media.signer import KeySigner
            from shared.config import get_settings

            self._signer = KeySigner(
                self.object_store,
                fail_closed=get_settings().signing_fail_closed,
            )
        return self._signer

    @property
    def media(self) -> "IMediaService":
        """Get the media delivery service."""
        if self._media_service is None:
            from modules.media.service import MediaService
            self._media_service = MediaService(
                store=self.object_store,
                signer=self.signer,
                auth=self.auth,
            )
        return self._media_service

    @property
    def catalog(self) -> "ICatalogService":
        """Get the catalog service."""
        if self._catalog_service is None:
            from modules.catalog.repository import CatalogRepository
            from modules.catalog.service import CatalogService
            from shared.database import get_supabase_client

            self._catalog_service = CatalogService(
                repository=CatalogRepository(get_supabase_client()),
                signer=self.signer,
                media=self.media,
            )
        return self._catalog_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._auth_service = None
        self._otp_service = None
        self._object_store = None
        self._signer = None
        self._media_service = None
        self._catalog_service = None
        self._ledger_service = None
        self._mailer = None
        self._gateway = None

    async def aclose(self) -> None:
        """Close the HTTP clients held by the email and payment integrations."""
        if self._mailer is not None:
            await self._mailer.close()
        if self._gateway is not None:
            await self._gateway.close()
        self.reset()


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container with new
    service instances. Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_otp_service() -> "IOtpService":
    """FastAPI dependency for signup code service."""
    return get_container().otp


def get_media_service() -> "IMediaService":
    """FastAPI dependency for media service."""
    return get_container().media


def get_catalog_service() -> "ICatalogService":
    """FastAPI dependency for catalog service."""
    return get_container().catalog


def get_ledger_service() -> "ILedgerService":
    """FastAPI dependency for ledger service."""
    return get_container().ledger
