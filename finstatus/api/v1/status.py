"""Payment status endpoints - stateless evaluation and per-user obligation status"""

import logging
import time
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from finstatus.api.dependencies import get_backend_client, get_request_id, get_today
from finstatus.api.v1.schemas import EvaluateRequest, StatusResponse, StatusSummaryResponse
from finstatus.domain.exceptions import BackendAPIError, ObligationNotFoundError
from finstatus.domain.models import ObligationType
from finstatus.domain.payment_status import evaluate_obligation, evaluate_status
from finstatus.infrastructure.clients.backend import BackendClient
from finstatus.infrastructure.observability.logging import log_status_evaluation
from finstatus.infrastructure.observability.metrics import backend_fetch_failures_counter, record_status

router = APIRouter()


@router.post("/status/evaluate", response_model=StatusResponse)
def evaluate(request_body: EvaluateRequest, request: Request, today: date = Depends(get_today)):
    """
    Evaluate payment status from caller-supplied settings and payment history.

    Nothing is fetched or stored; the same inputs always give the same answer.
    """
    start_time = time.time()
    now = request_body.as_of or today
    settings = request_body.settings.to_domain() if request_body.settings else None

    result = evaluate_status(
        request_body.obligation_type,
        request_body.billing_day,
        [p.to_domain() for p in request_body.payments],
        settings,
        now,
    )

    record_status(result)
    log_status_evaluation(
        get_request_id(request),
        None,
        result.obligation_type.value,
        result.target_period,
        result.paid,
        (time.time() - start_time) * 1000,
    )
    return StatusResponse.from_domain(result)


@router.get("/status", response_model=StatusSummaryResponse)
async def get_user_statuses(
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    as_of: Optional[date] = Query(None, description="Evaluation date (default: today)"),
    today: date = Depends(get_today),
    backend: BackendClient = Depends(get_backend_client),
):
    """
    Payment status of every active credit, mortgage and subscription of a user.

    ``all_paid`` tells per type whether every active obligation is settled,
    which drives the dashboard widget headers.
    """
    request_id = get_request_id(request)
    now = as_of or today

    try:
        settings = await backend.get_settings(user_id)
        obligations = await backend.list_obligations(user_id)

    except BackendAPIError as e:
        backend_fetch_failures_counter.inc()
        logging.error(f"Backend error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Finance backend unavailable")

    statuses = [evaluate_obligation(o, settings, now) for o in obligations if o.is_active]
    for result in statuses:
        record_status(result)

    all_paid = {
        obligation_type: all(s.paid for s in statuses if s.obligation_type == obligation_type)
        for obligation_type in ObligationType
    }

    return StatusSummaryResponse(
        user_id=user_id,
        as_of=now,
        statuses=[StatusResponse.from_domain(s) for s in statuses],
        all_paid=all_paid,
    )


@router.get("/status/{obligation_type}/{obligation_id}", response_model=StatusResponse)
async def get_obligation_status(
    obligation_type: ObligationType,
    obligation_id: str,
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    as_of: Optional[date] = Query(None, description="Evaluation date (default: today)"),
    today: date = Depends(get_today),
    backend: BackendClient = Depends(get_backend_client),
):
    """
    Payment status of a single obligation, recomputed from the backend's
    current settings and payment history.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        settings = await backend.get_settings(user_id)
        obligation = await backend.get_obligation(user_id, obligation_type, obligation_id)

    except ObligationNotFoundError as e:
        logging.warning(f"Obligation not found: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    except BackendAPIError as e:
        backend_fetch_failures_counter.inc()
        logging.error(f"Backend error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Finance backend unavailable")

    result = evaluate_obligation(obligation, settings, as_of or today)

    record_status(result)
    log_status_evaluation(
        request_id,
        user_id,
        obligation_type.value,
        result.target_period,
        result.paid,
        (time.time() - start_time) * 1000,
    )
    return StatusResponse.from_domain(result)
