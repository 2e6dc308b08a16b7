"""POST /v1/simulation - Multi-month cash-flow simulation with overrides"""

import time
import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request

from forecast_engine.api.dependencies import get_request_id, get_settings
from forecast_engine.api.v1.schemas import (
    DefaultsSchema,
    SimulationMonthSchema,
    SimulationRequest,
    SimulationResponse,
    SummarySchema,
)
from forecast_engine.config import Settings
from forecast_engine.domain.baseline import build_baseline
from forecast_engine.domain.exceptions import InvalidArgumentError
from forecast_engine.domain.simulation import simulate_cash_flow, summarize_simulation
from forecast_engine.infrastructure.observability.logging import log_simulation
from forecast_engine.infrastructure.observability.metrics import record_simulation

router = APIRouter()


@router.post("/simulation", response_model=SimulationResponse)
def create_simulation(
    request_body: SimulationRequest,
    request: Request,
    config: Settings = Depends(get_settings),
):
    """
    Simulate income, expenses and running balance month by month.

    Flow:
    1. Use the supplied baseline, or derive it from income / expense history,
       fixed expenses and active loans
    2. Apply overrides and run the simulation over the requested horizon
    3. Return the monthly sequence, the baseline defaults and a risk summary
    """
    start_time = time.time()
    request_id = get_request_id(request)
    horizon = request_body.months if request_body.months is not None else config.default_simulation_months

    try:
        if request_body.baseline is not None:
            baseline = request_body.baseline.to_domain()
        else:
            baseline = build_baseline(
                [r.to_domain() for r in request_body.income_records],
                [r.to_domain() for r in request_body.variable_expense_records],
                [f.to_domain() for f in request_body.fixed_expenses],
                [loan.to_domain() for loan in request_body.loans],
                reference_date=request_body.reference_date or date.today(),
                window_months=config.average_window_months,
            )

        overrides = [o.to_domain() for o in request_body.overrides]
        cash_flow = simulate_cash_flow(
            baseline,
            overrides,
            horizon_months=horizon,
            starting_balance=request_body.starting_balance,
            max_horizon_months=config.max_horizon_months,
        )
        summary = summarize_simulation(cash_flow)

    except InvalidArgumentError as e:
        logging.warning(f"Invalid simulation request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_simulation(summary.risk_level)
    log_simulation(request_id, horizon, len(overrides), summary.risk_level, duration_ms)

    return SimulationResponse(
        cash_flow=[
            SimulationMonthSchema(
                index=m.index,
                income=m.income,
                expenses=m.expenses,
                net_flow=m.net_flow,
                running_balance=m.running_balance,
                status=m.status,
            )
            for m in cash_flow
        ],
        defaults=DefaultsSchema(
            monthly_income=baseline.monthly_income,
            monthly_expenses=baseline.monthly_expenses,
        ),
        summary=SummarySchema(
            total_months=summary.total_months,
            negative_months=summary.negative_months,
            lowest_balance=summary.lowest_balance,
            final_balance=summary.final_balance,
            risk_level=summary.risk_level,
        ),
    )
