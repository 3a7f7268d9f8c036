"""Unit of work: one session, its repositories, and one transaction boundary."""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy.orm import Session

from studio_catalog.storage.repositories import (
    CategoryRepository,
    ItemRepository,
    SectionCategoryRepository,
    SectionRepository,
)


class UnitOfWork:
    """Bundles the catalog repositories over a single session.

    Everything done inside :meth:`transaction` is committed together or
    rolled back together.
    """

    def __init__(self, session: Session):
        self.session = session
        self.sections = SectionRepository(session)
        self.categories = CategoryRepository(session)
        self.section_categories = SectionCategoryRepository(session)
        self.items = ItemRepository(session)

    def flush(self) -> None:
        self.session.flush()

    @contextmanager
    def transaction(self) -> Generator["UnitOfWork", None, None]:
        """Commit on success, roll back everything on any exception.

        Nodes loaded before the transaction are expired first, so every read
        inside it sees what other sessions have committed.
        """
        self.session.expire_all()
        try:
            yield self
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
