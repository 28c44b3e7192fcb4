from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import tzinfo
from typing import Optional

from .attendance.classifier import AttendanceClassifier
from .attendance.factory import SubmissionStrategyFactory
from .attendance.service import AttendanceService
from .common.datetime_utils import load_timezone
from .completion.calculator import CompletionCalculator
from .core.exceptions import ConfigurationError
from .database.connection import DBConfig, DatabaseConnection
from .matching.record_matcher import RecordMatcher
from .thresholds.memory_threshold_repository import InMemoryThresholdRepository
from .thresholds.mysql_threshold_repository import MySQLThresholdRepository
from .thresholds.repository import ThresholdRepository
from .thresholds.service import ThresholdService
from .timing.windows import TimeWindowPolicy


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    threshold_repo: ThresholdRepository

    attendance_service: AttendanceService
    threshold_service: ThresholdService

    zone: Optional[tzinfo] = None


def build_container(
    *,
    db_config: dict,
    threshold_store: str = "mysql",
    policy: Optional[TimeWindowPolicy] = None,
    timezone: Optional[str] = None,
) -> Container:
    conn = None
    store = (threshold_store or "mysql").strip().lower()
    if store == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
        threshold_repo: ThresholdRepository = MySQLThresholdRepository(conn)
    elif store == "memory":
        threshold_repo = InMemoryThresholdRepository()
    else:
        raise ConfigurationError(f"THRESHOLD_STORE không hợp lệ: {threshold_store!r} (mysql|memory)")

    matcher = RecordMatcher()
    policy = policy or TimeWindowPolicy()
    zone = load_timezone(timezone) if timezone is not None else policy.zone
    policy = replace(policy, zone=zone)
    classifier = AttendanceClassifier(matcher=matcher, policy=policy)
    attendance_service = AttendanceService(
        classifier=classifier,
        completion=CompletionCalculator(matcher=matcher),
        strategy_factory=SubmissionStrategyFactory(),
    )
    threshold_service = ThresholdService(threshold_repo)

    return Container(
        conn=conn,
        threshold_repo=threshold_repo,
        attendance_service=attendance_service,
        threshold_service=threshold_service,
        zone=zone,
    )
