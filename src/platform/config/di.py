"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.catalog.driven_adapter.repo.catalog_command_repo_impl import (
    CatalogCommandRepoImpl,
)
from src.service.catalog.driven_adapter.repo.catalog_query_repo_impl import CatalogQueryRepoImpl
from src.service.inventory.app.command.release_capacity_use_case import ReleaseCapacityUseCase
from src.service.inventory.app.command.reserve_capacity_use_case import ReserveCapacityUseCase
from src.service.inventory.driven_adapter.repo.time_slot_query_repo_impl import (
    TimeSlotQueryRepoImpl,
)
from src.service.ticketing.app.command.release_expired_cart_items_use_case import (
    ReleaseExpiredCartItemsUseCase,
)
from src.service.ticketing.app.query.quote_line_use_case import QuoteLineUseCase
from src.service.ticketing.driven_adapter.payment.razorpay_gateway_impl import (
    RazorpayGatewayImpl,
)
from src.service.ticketing.driven_adapter.repo.booking_query_repo_impl import BookingQueryRepoImpl
from src.service.ticketing.driven_adapter.repo.booking_report_repo_impl import (
    BookingReportRepoImpl,
)
from src.service.ticketing.driven_adapter.repo.payment_log_repo_impl import PaymentLogRepoImpl
from src.service.ticketing.driven_adapter.repo.user_profile_repo_impl import UserProfileRepoImpl
from src.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (engine bound to the running event loop, see orm_db_setting)
    database = providers.Singleton(Database)

    # Unit of work: a fresh session per use case invocation
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=database.provided.session
    )

    # Repositories (stateless - use session_factory per call)
    catalog_query_repo = providers.Singleton(
        CatalogQueryRepoImpl, session_factory=database.provided.session
    )
    catalog_command_repo = providers.Singleton(
        CatalogCommandRepoImpl, session_factory=database.provided.session
    )
    time_slot_query_repo = providers.Singleton(
        TimeSlotQueryRepoImpl, session_factory=database.provided.session
    )
    booking_query_repo = providers.Singleton(
        BookingQueryRepoImpl, session_factory=database.provided.session
    )
    booking_report_repo = providers.Singleton(
        BookingReportRepoImpl, session_factory=database.provided.session
    )
    user_profile_repo = providers.Singleton(
        UserProfileRepoImpl, session_factory=database.provided.session
    )
    payment_log_repo = providers.Singleton(
        PaymentLogRepoImpl, session_factory=database.provided.session
    )

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)

    # Payment gateway (overridden with a fake in tests)
    payment_gateway = providers.Singleton(RazorpayGatewayImpl)

    # Capacity ledger use cases (stateless, can be Singleton)
    reserve_capacity_use_case = providers.Singleton(ReserveCapacityUseCase)
    release_capacity_use_case = providers.Singleton(ReleaseCapacityUseCase)
    release_expired_cart_items_use_case = providers.Singleton(
        ReleaseExpiredCartItemsUseCase,
        release_capacity=release_capacity_use_case,
    )
    quote_line_use_case = providers.Singleton(
        QuoteLineUseCase,
        catalog_query_repo=catalog_query_repo,
        time_slot_query_repo=time_slot_query_repo,
    )


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
