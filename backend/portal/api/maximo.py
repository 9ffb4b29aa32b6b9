"""Maximo API routes."""
from fastapi import APIRouter, Response, status
from portal.actions import maximo_actions
from portal.schemas.github import ActionResult
from portal.schemas.maximo import MaximoConfiguration

router = APIRouter()


@router.post("/configurations", response_model=ActionResult)
async def upload_configuration(
    configuration: MaximoConfiguration,
    response: Response,
):
    """Upload a configuration (script, XML, report) to Maximo."""
    result = await maximo_actions.upload_maximo_configuration_action(configuration)
    if not result.success:
        response.status_code = status.HTTP_400_BAD_REQUEST
    return result
