from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_admin, get_use_cases
from app.api.schemas.api_keys import (
    ApiKeyEnvelope,
    ApiKeyListResponse,
    ApiKeyResponse,
    CreateApiKeyRequest,
    IssuedApiKeyResponse,
    UpdateApiKeyRequest,
)
from app.api.schemas.cars import CarEnvelope, CarResponse, UpdateCarApprovalRequest
from app.api.schemas.commissions import (
    CommissionEnvelope,
    CommissionListResponse,
    CommissionResponse,
    CommissionSummary,
    MarkCommissionRequest,
)
from app.domain.entities.commission_log import CommissionStatus

# Todas las rutas exigen PLATFORM_OWNER.
router = APIRouter(prefix="/admin", dependencies=[Depends(get_admin)])


@router.get("/commissions", response_model=CommissionListResponse, status_code=status.HTTP_200_OK)
async def list_commissions(
    commission_status: CommissionStatus | None = Query(default=None, alias="status"),
    partner_id: str | None = Query(default=None, alias="partnerId"),
    use_cases=Depends(get_use_cases),
) -> CommissionListResponse:
    report = await use_cases["list_commissions"].execute(
        status=commission_status, partner_id=partner_id
    )
    return CommissionListResponse(
        commissions=[CommissionResponse.model_validate(c) for c in report.commissions],
        summary=CommissionSummary(total=report.total, count=report.count),
    )


@router.patch(
    "/commissions/{commission_id}",
    response_model=CommissionEnvelope,
    status_code=status.HTTP_200_OK,
)
async def mark_commission(
    commission_id: str,
    payload: MarkCommissionRequest,
    use_cases=Depends(get_use_cases),
) -> CommissionEnvelope:
    commission = await use_cases["mark_commission_paid"].execute(
        commission_id=commission_id, status=payload.status
    )
    return CommissionEnvelope(commission=CommissionResponse.model_validate(commission))


@router.get("/api-keys", response_model=ApiKeyListResponse, status_code=status.HTTP_200_OK)
async def list_api_keys(use_cases=Depends(get_use_cases)) -> ApiKeyListResponse:
    api_keys = await use_cases["list_api_keys"].execute()
    return ApiKeyListResponse(api_keys=[ApiKeyResponse.model_validate(k) for k in api_keys])


@router.post(
    "/api-keys",
    response_model=IssuedApiKeyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def issue_api_key(
    payload: CreateApiKeyRequest,
    use_cases=Depends(get_use_cases),
) -> IssuedApiKeyResponse:
    issued = await use_cases["issue_api_key"].execute(payload)
    return IssuedApiKeyResponse(
        api_key=ApiKeyResponse.model_validate(issued.api_key),
        plain_text_key=issued.plain_text_key,
    )


@router.patch(
    "/api-keys/{api_key_id}",
    response_model=ApiKeyEnvelope,
    status_code=status.HTTP_200_OK,
)
async def update_api_key(
    api_key_id: str,
    payload: UpdateApiKeyRequest,
    use_cases=Depends(get_use_cases),
) -> ApiKeyEnvelope:
    api_key = await use_cases["update_api_key"].execute(api_key_id, payload)
    return ApiKeyEnvelope(api_key=ApiKeyResponse.model_validate(api_key))


@router.delete("/api-keys/{api_key_id}", status_code=status.HTTP_200_OK)
async def delete_api_key(api_key_id: str, use_cases=Depends(get_use_cases)) -> dict:
    await use_cases["delete_api_key"].execute(api_key_id)
    return {"success": True}


@router.patch(
    "/cars/{car_id}/approval",
    response_model=CarEnvelope,
    status_code=status.HTTP_200_OK,
)
async def update_car_approval(
    car_id: str,
    payload: UpdateCarApprovalRequest,
    use_cases=Depends(get_use_cases),
) -> CarEnvelope:
    car = await use_cases["update_car_approval"].execute(car_id=car_id, status=payload.status)
    return CarEnvelope(car=CarResponse.model_validate(car))
