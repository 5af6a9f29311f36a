"""Request bodies accepted by the Payroll Pulse API."""

from __future__ import annotations

import datetime as dt
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from .models import AttendanceEvent, Employee, PayrollRules


class EmployeeIn(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    slack_user_id: str = ""
    hourly_rate: float = Field(..., gt=0)
    status: Literal["active", "inactive"] = "active"
    email: Optional[str] = None
    start_time: Optional[str] = None
    timezone: Optional[str] = None
    grace_period_minutes: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None

    def to_model(self) -> Employee:
        return Employee(**self.model_dump())


class AttendanceEventIn(BaseModel):
    user: str
    text: str
    ts: float
    date: str

    def to_model(self) -> AttendanceEvent:
        return AttendanceEvent(**self.model_dump())


class PayrollRulesIn(BaseModel):
    standard_work_hours: float = Field(8.0, gt=0)
    overtime_multiplier: float = Field(1.5, ge=1)
    late_grace_period_minutes: int = Field(5, ge=0)
    late_deduction_amount: float = Field(10.0, ge=0)
    offline_deduction_amount: float = Field(50.0, ge=0)

    def to_model(self) -> PayrollRules:
        return PayrollRules(**self.model_dump())


class RosterRequest(BaseModel):
    employees: Optional[List[EmployeeIn]] = None

    def roster(self) -> Optional[List[Employee]]:
        if self.employees is None:
            return None
        return [employee.to_model() for employee in self.employees]


class ParseRequest(RosterRequest):
    text: str
    date: Optional[dt.date] = None


class EventsRequest(RosterRequest):
    events: List[AttendanceEventIn] = Field(default_factory=list)
    rules: Optional[PayrollRulesIn] = None

    def event_models(self) -> List[AttendanceEvent]:
        return [event.to_model() for event in self.events]

    def rules_model(self) -> Optional[PayrollRules]:
        return self.rules.to_model() if self.rules else None


class PayrollRequest(EventsRequest):
    period: Optional[Literal["first-half", "second-half", "full-month"]] = None
    date: Optional[dt.date] = None
    active_only: bool = False


__all__ = [
    "EmployeeIn",
    "AttendanceEventIn",
    "PayrollRulesIn",
    "RosterRequest",
    "ParseRequest",
    "EventsRequest",
    "PayrollRequest",
]
