"""POST /v1/projection - Upcoming obligations per month"""

import time
import logging
from typing import Set, Tuple

from fastapi import APIRouter, Depends, HTTPException, Request

from forecast_engine.api.dependencies import get_policies, get_request_id, get_settings
from forecast_engine.api.v1.schemas import (
    ObligationSchema,
    ProjectionMonthSchema,
    ProjectionRequest,
    ProjectionResponse,
)
from forecast_engine.config import Settings
from forecast_engine.domain.exceptions import InvalidArgumentError, MalformedRecordError
from forecast_engine.domain.priority import ClassificationPolicies
from forecast_engine.domain.projection import project_obligations
from forecast_engine.infrastructure.observability.logging import log_projection, log_skipped_record
from forecast_engine.infrastructure.observability.metrics import record_projection, skipped_records_counter

router = APIRouter()


@router.post("/projection", response_model=ProjectionResponse)
def create_projection(
    request_body: ProjectionRequest,
    request: Request,
    config: Settings = Depends(get_settings),
    policies: ClassificationPolicies = Depends(get_policies),
):
    """
    Project scheduled loan, bill and subscription payments.

    Flow:
    1. Convert the already user-scoped records to domain objects
    2. Resolve obligations for each month from the reference date
    3. Log and count records that could not be resolved
    4. Return months with sorted obligations and priority totals
    """
    start_time = time.time()
    request_id = get_request_id(request)
    months_ahead = (
        request_body.months_ahead
        if request_body.months_ahead is not None
        else config.default_projection_months
    )

    # The same bad record fails once per projected month; report it once
    skipped: Set[Tuple[str, str]] = set()

    def on_skip(record, error: MalformedRecordError) -> None:
        key = (error.source, error.record_id)
        if key in skipped:
            return
        skipped.add(key)
        skipped_records_counter.labels(source=error.source).inc()
        log_skipped_record(request_id, error.source, error.record_id, error.reason)

    try:
        projection = project_obligations(
            [loan.to_domain() for loan in request_body.loans],
            [expense.to_domain() for expense in request_body.fixed_expenses],
            [subscription.to_domain() for subscription in request_body.subscriptions],
            months_ahead=months_ahead,
            reference_date=request_body.reference_date,
            policies=policies,
            on_skip=on_skip,
            max_months_ahead=config.max_projection_months,
        )

    except InvalidArgumentError as e:
        logging.warning(f"Invalid projection request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_projection([len(month.obligations) for month in projection])
    log_projection(
        request_id,
        months_ahead,
        sum(len(month.obligations) for month in projection),
        len(skipped),
        duration_ms,
    )

    return ProjectionResponse(
        projection=[
            ProjectionMonthSchema(
                label=month.label,
                year=month.year,
                month=month.month,
                obligations=[
                    ObligationSchema(
                        id=o.id,
                        name=o.name,
                        amount=o.amount,
                        due_date=o.due_date,
                        type=o.type,
                        priority=o.priority,
                        status=o.status,
                    )
                    for o in month.obligations
                ],
                total_amount=month.total_amount,
                critical_total=month.critical_total,
                important_total=month.important_total,
                routine_total=month.routine_total,
            )
            for month in projection
        ],
        skipped_records=len(skipped),
    )
