"""Maximo actions."""
import logging
from portal.schemas.github import ActionResult
from portal.schemas.maximo import MaximoConfiguration
from portal.services import maximo_service

logger = logging.getLogger(__name__)


async def upload_maximo_configuration_action(configuration: MaximoConfiguration) -> ActionResult:
    """Upload a configuration to Maximo."""
    try:
        if await maximo_service.upload_configuration(configuration):
            return ActionResult(success=True)
        return ActionResult(success=False, error="Maximo API returned failure.")
    except Exception:
        logger.exception("Error uploading Maximo configuration %s", configuration.name)
        return ActionResult(success=False, error="Server error during upload.")
