"""Maximo configuration upload service."""
import logging
from typing import Optional
import httpx
from portal.config import get_settings
from portal.connectors.maximo import MaximoClient
from portal.schemas.maximo import MaximoConfiguration

logger = logging.getLogger(__name__)


def get_maximo_client(transport: httpx.AsyncBaseTransport = None) -> Optional[MaximoClient]:
    """Client for the configured Maximo API, or None when it is not configured."""
    settings = get_settings()
    if not settings.maximo_api_url:
        return None
    return MaximoClient(
        base_url=settings.maximo_api_url,
        api_key=settings.maximo_api_key or None,
        transport=transport,
    )


async def upload_configuration(
    configuration: MaximoConfiguration,
    client: Optional[MaximoClient] = None,
) -> bool:
    """Upload a configuration to Maximo. Without a Maximo API the upload is only logged."""
    client = client or get_maximo_client()
    if client is None:
        logger.info("Configuration uploaded (simulated): %s [%s]", configuration.name, configuration.type)
        return True

    accepted = await client.upload_configuration(configuration.to_document())
    if accepted:
        logger.info("Configuration %s uploaded to Maximo", configuration.name)
    else:
        logger.warning("Maximo rejected configuration %s", configuration.name)
    return accepted
