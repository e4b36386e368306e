from __future__ import annotations

from dataclasses import dataclass

from .attendance.factory import AnomalyStrategyFactory
from .attendance.mysql_attendance_repository import MySQLPunchRepository
from .attendance.service import AttendanceQueryService
from .auth.token_client import TokenVerifier
from .businesscard.mysql_card_repository import MySQLCardProfileRepository
from .businesscard.service import BusinessCardService
from .core.constants import PERSONAL_LEAVE_CODE, PERSONAL_LEAVE_NAME, SICK_LEAVE_CODE, SICK_LEAVE_NAME
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .forms.business_trip_service import BusinessTripFormService
from .forms.cancel_leave_service import CancelLeaveService
from .forms.overtime_service import OvertimeFormService
from .forms.service import LeaveFormService
from .integrations.bpm_client import BpmClient
from .integrations.ftp_store import FtpAttachmentStore
from .integrations.mailer import SmtpMailer
from .leave.calculator.standard_calculator import StandardBalanceCalculator
from .leave.calculator.used_only_calculator import UsedOnlyBalanceCalculator
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .leave.service import LeaveBalanceService, StatutoryQuota
from .salary.mysql_verification_repository import MySQLVerificationCodeRepository
from .salary.service import SalaryVerificationService
from .settings import AppSettings


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    token_verifier: TokenVerifier
    bpm_client: BpmClient
    attachment_store: FtpAttachmentStore
    mailer: SmtpMailer

    attendance_service: AttendanceQueryService
    leave_service: LeaveBalanceService
    salary_verification_service: SalaryVerificationService
    leave_form_service: LeaveFormService
    overtime_form_service: OvertimeFormService
    cancel_leave_service: CancelLeaveService
    business_trip_form_service: BusinessTripFormService
    business_card_service: BusinessCardService


def build_container(*, settings: AppSettings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(settings.db))

    employees_repo = MySQLEmployeeRepository(conn)
    punches_repo = MySQLPunchRepository(conn)
    leaves_repo = MySQLLeaveRepository(conn)
    codes_repo = MySQLVerificationCodeRepository(conn)
    card_profiles_repo = MySQLCardProfileRepository(conn)

    token_verifier = TokenVerifier(verify_url=settings.token_verify_url, timeout=settings.token_verify_timeout)
    bpm_client = BpmClient(settings.bpm)
    attachment_store = FtpAttachmentStore(settings.ftp)
    mailer = SmtpMailer(settings.smtp)

    attendance_service = AttendanceQueryService(punches_repo, strategy_factory=AnomalyStrategyFactory())
    leave_service = LeaveBalanceService(
        leaves_repo,
        employees_repo,
        day_work_hours=settings.day_work_hours,
        statutory_quotas=(
            StatutoryQuota(PERSONAL_LEAVE_CODE, PERSONAL_LEAVE_NAME, settings.personal_leave_hours),
            StatutoryQuota(SICK_LEAVE_CODE, SICK_LEAVE_NAME, settings.sick_leave_hours),
        ),
        calculator=StandardBalanceCalculator(),
        calculators={SICK_LEAVE_CODE: UsedOnlyBalanceCalculator()},
    )
    salary_verification_service = SalaryVerificationService(
        codes_repo,
        employees_repo,
        mailer,
        expiry_minutes=settings.verification_code_minutes,
        test_code=settings.verification_test_code,
    )
    leave_form_service = LeaveFormService(
        employees_repo,
        leaves_repo,
        bpm_client,
        environment=settings.bpm.environment,
    )
    overtime_form_service = OvertimeFormService(employees_repo, bpm_client, environment=settings.bpm.environment)
    cancel_leave_service = CancelLeaveService(employees_repo, bpm_client)
    business_trip_form_service = BusinessTripFormService(
        employees_repo,
        bpm_client,
        attachment_store,
        environment=settings.bpm.environment,
    )
    business_card_service = BusinessCardService(card_profiles_repo, base_url=settings.business_card_base_url)

    return Container(
        conn=conn,
        token_verifier=token_verifier,
        bpm_client=bpm_client,
        attachment_store=attachment_store,
        mailer=mailer,
        attendance_service=attendance_service,
        leave_service=leave_service,
        salary_verification_service=salary_verification_service,
        leave_form_service=leave_form_service,
        overtime_form_service=overtime_form_service,
        cancel_leave_service=cancel_leave_service,
        business_trip_form_service=business_trip_form_service,
        business_card_service=business_card_service,
    )
