"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from stagepass.platform.config.core_setting import Settings
from stagepass.platform.database.orm_db_setting import Database
from stagepass.platform.metrics.reservation_metrics import metrics
from stagepass.service.ticketing.driven_adapter.repo.concert_query_repo_impl import (
    ConcertQueryRepoImpl,
)
from stagepass.service.ticketing.driven_adapter.repo.reservation_query_repo_impl import (
    ReservationQueryRepoImpl,
)
from stagepass.service.ticketing.driven_adapter.repo.user_command_repo_impl import (
    UserCommandRepoImpl,
)
from stagepass.service.ticketing.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from stagepass.service.ticketing.driven_adapter.repo.venue_command_repo_impl import (
    VenueCommandRepoImpl,
)
from stagepass.service.ticketing.driven_adapter.repo.venue_query_repo_impl import (
    VenueQueryRepoImpl,
)
from stagepass.service.ticketing.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from stagepass.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (event-loop-aware engine behind Database.session)
    database = providers.Singleton(Database)

    # Repositories (stateless - open a session per call via session_factory)
    # Concert/reservation command repos are built by the unit of work instead
    user_command_repo = providers.Singleton(
        UserCommandRepoImpl, session_factory=database.provided.session
    )
    user_query_repo = providers.Singleton(
        UserQueryRepoImpl, session_factory=database.provided.session
    )
    venue_command_repo = providers.Singleton(
        VenueCommandRepoImpl, session_factory=database.provided.session
    )
    venue_query_repo = providers.Singleton(
        VenueQueryRepoImpl, session_factory=database.provided.session
    )
    concert_query_repo = providers.Singleton(
        ConcertQueryRepoImpl, session_factory=database.provided.session
    )
    reservation_query_repo = providers.Singleton(
        ReservationQueryRepoImpl, session_factory=database.provided.session
    )

    # Auth
    password_hasher = providers.Singleton(BcryptPasswordHasher)
    jwt_auth = providers.Singleton(JwtAuth)

    # Prometheus collectors register globally, so the module instance is shared
    reservation_metrics = providers.Object(metrics)


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
