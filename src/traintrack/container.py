from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import ReportService
from .trainees.mysql_trainee_repository import MySQLTraineeRepository
from .trainees.repository import TraineeRepository
from .trainees.service import TraineeService
from .trainings.mysql_training_repository import MySQLTrainingRepository
from .trainings.repository import TrainingRepository
from .trainings.service import TrainingService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    trainings_repo: TrainingRepository
    trainees_repo: TraineeRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    user_service: UserService
    training_service: TrainingService
    trainee_service: TraineeService
    attendance_service: AttendanceService
    report_service: ReportService


def wire(
    *,
    users_repo: UserRepository,
    trainings_repo: TrainingRepository,
    trainees_repo: TraineeRepository,
    attendance_repo: AttendanceRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services on top of any set of repositories."""
    return Container(
        conn=conn,
        users_repo=users_repo,
        trainings_repo=trainings_repo,
        trainees_repo=trainees_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        training_service=TrainingService(trainings_repo, users_repo),
        trainee_service=TraineeService(trainees_repo, trainings_repo),
        attendance_service=AttendanceService(attendance_repo, trainings_repo, trainees_repo),
        report_service=ReportService(trainings_repo, trainees_repo, attendance_repo, users_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        trainings_repo=MySQLTrainingRepository(conn),
        trainees_repo=MySQLTraineeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
    )
