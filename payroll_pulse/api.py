"""FastAPI application exposing the Payroll Pulse REST API."""

from __future__ import annotations

from dataclasses import asdict
from typing import Optional

from fastapi import Depends, FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

from .config import Settings, load_settings
from .errors import ErrorLog
from .fallback import ExternalModel
from .roster import active_employees, filter_employees
from .schemas import EventsRequest, ParseRequest, PayrollRequest
from .service import PayrollPulseService


def create_app(
    settings: Optional[Settings] = None,
    error_log: Optional[ErrorLog] = None,
    external_model: Optional[ExternalModel] = None,
) -> FastAPI:
    settings = settings or load_settings()
    error_log = error_log or ErrorLog()
    service = PayrollPulseService(settings, error_log, external_model)

    app = FastAPI(title="Payroll Pulse API", version="1.0.0")

    # RosterRequiredError is a ValueError too.
    @app.exception_handler(ValueError)
    async def value_error_handler(_: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    def get_service() -> PayrollPulseService:
        return service

    @app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/employees")
    async def list_employees(
        search: str = "",
        active_only: bool = False,
        svc: PayrollPulseService = Depends(get_service),
    ) -> dict[str, object]:
        roster = svc.resolve_roster()
        if active_only:
            roster = active_employees(roster)
        return {"employees": [asdict(employee) for employee in filter_employees(roster, search)]}

    @app.post("/api/attendance/parse")
    async def parse_attendance(
        body: ParseRequest,
        svc: PayrollPulseService = Depends(get_service),
    ) -> dict[str, object]:
        result = svc.parse_text(body.text, body.roster(), today=body.date)
        return asdict(result)

    @app.post("/api/attendance/logs")
    async def attendance_logs(
        body: EventsRequest,
        svc: PayrollPulseService = Depends(get_service),
    ) -> dict[str, object]:
        logs = svc.derive_logs(body.event_models(), body.roster(), body.rules_model())
        return {"logs": [asdict(log) for log in logs]}

    @app.post("/api/payroll/summary")
    async def payroll_summary(
        body: PayrollRequest,
        svc: PayrollPulseService = Depends(get_service),
    ) -> dict[str, object]:
        outcome = _calculate(svc, body)
        return {
            "summaries": [asdict(summary) for summary in outcome.value],
            "used_fallback": outcome.used_fallback,
            "reasoning": outcome.reasoning,
            "confidence": outcome.confidence,
            "error": outcome.error,
        }

    @app.post("/api/payroll/export")
    async def payroll_export(
        body: PayrollRequest,
        svc: PayrollPulseService = Depends(get_service),
    ) -> Response:
        outcome = _calculate(svc, body)
        return Response(
            content=svc.export_payroll_csv(outcome),
            media_type="text/csv",
            headers={"Content-Disposition": 'attachment; filename="payroll.csv"'},
        )

    @app.post("/api/metrics")
    async def dashboard_metrics(
        body: PayrollRequest,
        svc: PayrollPulseService = Depends(get_service),
    ) -> dict[str, object]:
        outcome = _calculate(svc, body)
        events = body.event_models()
        metrics = svc.dashboard_metrics(outcome.value, events, body.roster())
        return asdict(metrics)

    @app.get("/api/errors")
    async def list_errors(context: Optional[str] = None) -> dict[str, object]:
        errors = error_log.get_errors_by_context(context) if context else error_log.get_errors()
        return {"errors": [asdict(error) for error in errors]}

    return app


def _calculate(svc: PayrollPulseService, body: PayrollRequest):
    return svc.calculate_payroll(
        body.event_models(),
        body.roster(),
        body.rules_model(),
        period=body.period,
        day=body.date,
        active_only=body.active_only,
    )


app = create_app()


__all__ = ["app", "create_app"]
