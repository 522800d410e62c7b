"""GET/PUT /v1/settings/payment-status - payment status preferences"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from finstatus.api.dependencies import get_backend_client, get_request_id
from finstatus.api.v1.schemas import OptionsSchema, PaymentStatusSettingsSchema, SettingsResponse
from finstatus.domain.exceptions import BackendAPIError
from finstatus.domain.models import ObligationType, PaymentStatusSettings
from finstatus.domain.payment_status import get_payment_status_options
from finstatus.infrastructure.clients.backend import BackendClient, SETTINGS_FIELDS
from finstatus.infrastructure.observability.metrics import backend_fetch_failures_counter

router = APIRouter()


def _settings_response(user_id: str, settings: PaymentStatusSettings) -> SettingsResponse:
    stored = {}
    for name in SETTINGS_FIELDS:
        value = getattr(settings, name)
        stored[name] = None if value is None else str(getattr(value, "value", value))

    effective = {}
    for obligation_type in ObligationType:
        options = get_payment_status_options(settings, obligation_type)
        effective[obligation_type] = OptionsSchema(logic=options.logic, period=options.period)

    return SettingsResponse(user_id=user_id, stored=stored, effective=effective)


@router.get("/settings/payment-status", response_model=SettingsResponse)
async def get_payment_status_settings(
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    backend: BackendClient = Depends(get_backend_client),
):
    """
    Stored payment status preferences plus the effective logic/period each
    obligation type resolves to.
    """
    try:
        settings = await backend.get_settings(user_id)
    except BackendAPIError as e:
        backend_fetch_failures_counter.inc()
        logging.error(f"Backend error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=503, detail="Finance backend unavailable")

    return _settings_response(user_id, settings)


@router.put("/settings/payment-status", response_model=SettingsResponse)
async def update_payment_status_settings(
    request_body: PaymentStatusSettingsSchema,
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    backend: BackendClient = Depends(get_backend_client),
):
    """
    Validate and store a partial update.

    Only fields present in the body change; "global" or null clears a
    per-type override.
    """
    request_id = get_request_id(request)
    changes = request_body.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=422, detail="No settings to update")

    try:
        settings = await backend.update_settings(user_id, changes)
    except BackendAPIError as e:
        backend_fetch_failures_counter.inc()
        logging.error(f"Backend error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Finance backend unavailable")

    logging.info(
        "Payment status settings updated",
        extra={"request_id": request_id, "user_id": user_id, "fields": sorted(changes)},
    )
    return _settings_response(user_id, settings)
