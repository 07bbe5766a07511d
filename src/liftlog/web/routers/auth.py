"""Sign-in routes."""

from fastapi import APIRouter, Depends, Form, HTTPException

from ...errors import AuthenticationError
from ...services.migration import MigrationService
from ..deps import get_migration_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/sign-in")
async def sign_in(
    email: str = Form(...),
    password: str = Form(...),
    service: MigrationService = Depends(get_migration_service),
):
    """Sign the backend session in so migration can run."""
    sign_in_method = getattr(service.gateway, "sign_in", None)
    if sign_in_method is None:
        raise HTTPException(status_code=501, detail="Backend does not support sign-in")

    try:
        account_id = await sign_in_method(email, password)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e

    return {"accountId": account_id}


@router.get("/session")
async def session(service: MigrationService = Depends(get_migration_service)):
    """The signed-in account, if any."""
    if service.gateway is None:
        return {"accountId": None}
    return {"accountId": await service.gateway.get_current_account_id()}
