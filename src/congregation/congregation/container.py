from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .analysis.mysql_snapshot_repository import MySQLSnapshotRepository
from .analysis.outreach import OutreachService
from .analysis.repository import SnapshotRepository
from .analysis.service import LapseReportService
from .analysis.thresholds import ThresholdSet
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import (
    DEFAULT_ABSENT_SERVICE_WINDOW,
    DEFAULT_LAPSE_THRESHOLDS,
    DEFAULT_SMS_MAX_CONCURRENCY,
    DEFAULT_SMS_TIMEOUT_SECONDS,
)
from .database.connection import DBConfig, DatabaseConnection
from .imports.service import PeopleImportService
from .members.mysql_people_repository import MySQLPeopleRepository
from .members.repository import PeopleRepository
from .members.service import MemberService
from .messaging.gateway import SmsGateway, UnconfiguredSmsGateway
from .messaging.service import FollowUpService
from .messaging.twilio_gateway import TwilioSmsGateway
from .worship.mysql_service_repository import MySQLServiceRepository
from .worship.repository import ServiceRepository
from .worship.service import ServiceCalendarService

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    people_repo: PeopleRepository
    services_repo: ServiceRepository
    attendance_repo: AttendanceRepository

    member_service: MemberService
    calendar_service: ServiceCalendarService
    attendance_service: AttendanceService
    lapse_report_service: LapseReportService
    outreach_service: OutreachService
    follow_up_service: FollowUpService
    import_service: PeopleImportService

    absent_service_window: int = DEFAULT_ABSENT_SERVICE_WINDOW


def load_thresholds(value: Any) -> ThresholdSet:
    """Settings may hold ``"90,182,365,730"`` or a ``{tier: days}`` mapping."""
    if value is None:
        return ThresholdSet.from_mapping(DEFAULT_LAPSE_THRESHOLDS)
    if isinstance(value, str):
        return ThresholdSet.parse(value)
    return ThresholdSet.from_mapping(value)


def assemble_container(
    *,
    people_repo: PeopleRepository,
    services_repo: ServiceRepository,
    attendance_repo: AttendanceRepository,
    thresholds: ThresholdSet,
    gateway: SmsGateway,
    absent_service_window: int = DEFAULT_ABSENT_SERVICE_WINDOW,
    sms_max_concurrency: int = DEFAULT_SMS_MAX_CONCURRENCY,
    snapshots: Optional[SnapshotRepository] = None,
) -> Container:
    attendance_service = AttendanceService(attendance_repo, people_repo, services_repo)

    return Container(
        people_repo=people_repo,
        services_repo=services_repo,
        attendance_repo=attendance_repo,
        member_service=MemberService(people_repo),
        calendar_service=ServiceCalendarService(services_repo),
        attendance_service=attendance_service,
        lapse_report_service=LapseReportService(
            people_repo,
            services_repo,
            attendance_repo,
            thresholds=thresholds,
            snapshots=snapshots,
        ),
        outreach_service=OutreachService(people_repo, services_repo, attendance_repo),
        follow_up_service=FollowUpService(
            people_repo,
            services_repo,
            attendance_repo,
            gateway,
            max_concurrency=sms_max_concurrency,
        ),
        import_service=PeopleImportService(people_repo, attendance_service),
        absent_service_window=int(absent_service_window),
    )


def build_sms_gateway(settings: Optional[object]) -> SmsGateway:
    sid = getattr(settings, "TWILIO_ACCOUNT_SID", "")
    token = getattr(settings, "TWILIO_AUTH_TOKEN", "")
    from_number = getattr(settings, "TWILIO_PHONE_NUMBER", "")
    if not (sid and token and from_number):
        log.warning("Twilio credentials not set; SMS follow-ups will report failures")
        return UnconfiguredSmsGateway()
    return TwilioSmsGateway(
        account_sid=sid,
        auth_token=token,
        from_number=from_number,
        timeout=float(getattr(settings, "SMS_TIMEOUT_SECONDS", DEFAULT_SMS_TIMEOUT_SECONDS)),
    )


def build_container(*, db_config: dict, settings: Optional[object] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble_container(
        people_repo=MySQLPeopleRepository(conn),
        services_repo=MySQLServiceRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        thresholds=load_thresholds(getattr(settings, "LAPSE_THRESHOLDS", None)),
        gateway=build_sms_gateway(settings),
        absent_service_window=int(getattr(settings, "ABSENT_SERVICE_WINDOW", DEFAULT_ABSENT_SERVICE_WINDOW)),
        sms_max_concurrency=int(getattr(settings, "SMS_MAX_CONCURRENCY", DEFAULT_SMS_MAX_CONCURRENCY)),
        snapshots=MySQLSnapshotRepository(conn),
    )
