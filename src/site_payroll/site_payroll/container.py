from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .advances.mysql_advance_repository import MySQLAdvanceRepository
from .advances.repository import AdvanceRepository
from .advances.service import AdvanceService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.clock import Clock, SystemClock
from .database.connection import DBConfig, DatabaseConnection
from .labourers.mysql_labourer_repository import MySQLLabourerRepository
from .labourers.repository import LabourerRepository
from .overtime.mysql_overtime_repository import MySQLOvertimeRepository
from .overtime.repository import OvertimeRepository
from .overtime.service import OvertimeService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.service import PayrollService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    labourers_repo: LabourerRepository
    attendance_repo: AttendanceRepository
    overtime_repo: OvertimeRepository
    advances_repo: AdvanceRepository

    attendance_service: AttendanceService
    overtime_service: OvertimeService
    advance_service: AdvanceService
    payroll_service: PayrollService


def assemble(
    *,
    labourers_repo: LabourerRepository,
    attendance_repo: AttendanceRepository,
    overtime_repo: OvertimeRepository,
    advances_repo: AdvanceRepository,
    clock: Optional[Clock] = None,
    food_allowance: Optional[Decimal] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    clock = clock or SystemClock()

    attendance_service = AttendanceService(attendance_repo, clock=clock)
    overtime_service = OvertimeService(overtime_repo)
    advance_service = AdvanceService(advances_repo)
    payroll_service = PayrollService(
        labourers_repo,
        attendance_repo,
        overtime_repo,
        advances_repo,
        calculator=StandardPayrollCalculator(food_allowance=food_allowance),
    )

    return Container(
        conn=conn,
        labourers_repo=labourers_repo,
        attendance_repo=attendance_repo,
        overtime_repo=overtime_repo,
        advances_repo=advances_repo,
        attendance_service=attendance_service,
        overtime_service=overtime_service,
        advance_service=advance_service,
        payroll_service=payroll_service,
    )


def build_container(*, db_config: dict, clock: Optional[Clock] = None, food_allowance: Optional[Decimal] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        labourers_repo=MySQLLabourerRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        overtime_repo=MySQLOvertimeRepository(conn),
        advances_repo=MySQLAdvanceRepository(conn),
        clock=clock,
        food_allowance=food_allowance,
        conn=conn,
    )
