# campground_api/shared/container.py
from dependency_injector import containers, providers

from campground_api.adapters.geocoding.mapbox import MapboxGeocoder
from campground_api.adapters.images.cloudinary_store import CloudinaryImageStore
from campground_api.adapters.images.filesystem import FileSystemImageStore
from campground_api.adapters.persistence.campground_repo import SqlAlchemyCampgroundRepository
from campground_api.adapters.persistence.database import create_db_engine, create_session_factory
from campground_api.adapters.persistence.review_repo import SqlAlchemyReviewRepository
from campground_api.adapters.persistence.user_repo import SqlAlchemyUserRepository
from campground_api.core.services.campground_service import CampgroundService
from campground_api.core.services.review_service import ReviewService
from campground_api.core.services.user_service import UserService
from campground_api.shared.config import ImageStorageBackend, Settings


def build_image_store(settings: Settings):
    """Pick the image store adapter named by IMAGE_STORAGE_BACKEND."""
    if settings.IMAGE_STORAGE_BACKEND == ImageStorageBackend.CLOUDINARY:
        return CloudinaryImageStore(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_KEY,
            api_secret=settings.CLOUDINARY_SECRET,
            folder=settings.CLOUDINARY_FOLDER,
            timeout=settings.HTTP_TIMEOUT_SEC,
        )
    return FileSystemImageStore(
        base_path=settings.UPLOAD_DIR,
        url_prefix=settings.UPLOAD_URL_PREFIX,
    )


class Container(containers.DeclarativeContainer):
    """
    Dependency Injection Container.

    The only place concrete adapters are instantiated. Infrastructure is
    singleton; repositories and services are request-scoped factories that
    receive the request's SQLAlchemy session:

        container.campground_service(
            campground_repo__session=session,
            review_repo__session=session,
        )
    """

    # 1. Configuration
    # Overridable in tests: container.settings.override(Settings(...))
    settings = providers.Singleton(Settings)

    # 2. Persistence
    engine = providers.Singleton(
        create_db_engine,
        database_url=settings.provided.DATABASE_URL,
        echo=settings.provided.DEBUG,
    )
    session_factory = providers.Singleton(create_session_factory, engine=engine)

    # 3. Gateways (outbound adapters)
    geocoder = providers.Singleton(
        MapboxGeocoder,
        token=settings.provided.MAPBOX_TOKEN,
        base_url=settings.provided.MAPBOX_GEOCODING_URL,
        timeout=settings.provided.HTTP_TIMEOUT_SEC,
    )
    image_store = providers.Singleton(build_image_store, settings=settings)

    # 4. Repositories (one per request session)
    campground_repo = providers.Factory(SqlAlchemyCampgroundRepository)
    review_repo = providers.Factory(SqlAlchemyReviewRepository)
    user_repo = providers.Factory(SqlAlchemyUserRepository)

    # 5. Services
    campground_service = providers.Factory(
        CampgroundService,
        campground_repo=campground_repo,
        review_repo=review_repo,
    )
    review_service = providers.Factory(
        ReviewService,
        review_repo=review_repo,
        campground_repo=campground_repo,
    )
    user_service = providers.Factory(UserService, user_repo=user_repo)


def release_resources(container: Container) -> None:
    """
    Close the outbound adapters and the engine's pooled connections.
    Adapter singletons are reset, so a restarted app builds fresh ones.
    """
    container.geocoder().close()
    container.image_store().close()
    container.geocoder.reset()
    container.image_store.reset()
    container.engine().dispose()
