from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import FlushError
from qrlink_app.config import settings
from qrlink_app.errors import NotFoundError, StorageError
from qrlink_app.logging_config import get_logger
from qrlink_app.models.url import ShortLink
from qrlink_app.services.identifier_factory import IdentifierFactory, IdentifierKind
from qrlink_app.services.identifier_strategies import IdentifierStrategy

logger = get_logger(__name__)


class LinkService:
    """
    Short link service with the database session injected.

    Follows the Dependency Injection pattern: the session (and optionally the
    identifier strategy) come from outside, so tests can pass their own.
    """

    def __init__(
        self,
        db: Session,
        strategy: Optional[IdentifierStrategy] = None,
        max_attempts: Optional[int] = None
    ):
        """
        Initialize link service.

        Args:
            db: Database session
            strategy: Short link generator (default from factory)
            max_attempts: Inserts to try before giving up on collisions
        """
        self.db = db
        self.strategy = strategy or IdentifierFactory.create_strategy(IdentifierKind.SHORT_LINK)
        self.max_attempts = max(1, max_attempts or settings.short_link_max_attempts)

    def create_short_link(self, long_url: str, ip: str, user_agent: Optional[str] = None) -> str:
        """Create a new short link and return it

        Always creates a new record, even if the long URL was shortened before.

        Raises:
            StorageError: insert failed (including a primary key collision
                once all attempts are used up)
        """
        for attempt in range(1, self.max_attempts + 1):
            short_link = self.strategy.generate()
            record = ShortLink(
                short_link=short_link,
                long_url=long_url,
                ip=ip,
                user_agent=user_agent,
            )
            try:
                self.db.add(record)
                self.db.commit()
            except (IntegrityError, FlushError) as e:
                # FlushError: the colliding row is already loaded in this session
                self.db.rollback()
                logger.warning(
                    f"Short link collision on '{short_link}' "
                    f"(attempt {attempt}/{self.max_attempts}): {e}"
                )
                continue
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"Failed to insert short link: {e}")
                raise StorageError(str(e)) from e

            logger.info(f"Created short link '{short_link}' for {long_url}")
            return short_link

        raise StorageError(
            f"Could not store a unique short link after {self.max_attempts} attempts"
        )

    def long_url_for(self, short_link: str) -> str:
        """Look up the long URL behind a short link

        Raises:
            NotFoundError: no record for short_link
            StorageError: query failed
        """
        return self.get_short_link(short_link).long_url

    def get_short_link(self, short_link: str) -> ShortLink:
        """Fetch the full ShortLink record by primary key"""
        try:
            record = self.db.get(ShortLink, short_link)
        except SQLAlchemyError as e:
            logger.error(f"Failed to query short link '{short_link}': {e}")
            raise StorageError(str(e)) from e

        if record is None:
            logger.warning(f"Short link '{short_link}' not found")
            raise NotFoundError(f"short link {short_link!r} not found")
        return record
