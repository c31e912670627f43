from certverify.config.settings import Settings
from certverify.gateway.base import BaseSignalGateway
from certverify.gateway.http_adapter import HttpSignalGateway
from certverify.gateway.offline_adapter import OfflineSignalGateway


class GatewayFactory:
    """Creates the configured remote signal gateway."""

    PROVIDERS = ("http", "offline")

    @classmethod
    def create(cls, settings: Settings) -> BaseSignalGateway:
        provider = settings.gateway_provider.lower()
        if provider == "offline":
            return OfflineSignalGateway()
        if provider == "http":
            base_url = settings.api_base_url.strip()
            if not base_url:
                raise ValueError("api_base_url is required for gateway_provider=http")
            return HttpSignalGateway(
                base_url=base_url,
                api_token=settings.api_token,
                upload_timeout_seconds=settings.upload_timeout_seconds,
                ocr_timeout_seconds=settings.ocr_timeout_seconds,
                detection_timeout_seconds=settings.detection_timeout_seconds,
                verify_timeout_seconds=settings.verify_timeout_seconds,
                health_timeout_seconds=settings.health_timeout_seconds,
            )
        raise ValueError(
            f"Unknown gateway provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
