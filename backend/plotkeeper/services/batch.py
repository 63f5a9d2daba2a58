"""
Write batches for multi-step store operations.

A category replace-all, a multi-value upsert or a run of position updates
touches several rows. Wrapping the steps in a WriteBatch makes them one
transaction: the outermost batch commits on success and rolls back on any
exception, which is then re-raised unchanged. Batches opened while another
is active on the same session join it instead of committing early, so the
row aggregator can compose store writes into a single unit.
"""
import logging

from sqlalchemy.orm import Session

logger = logging.getLogger("plotkeeper.batch")

_DEPTH_KEY = "plotkeeper.batch_depth"


class WriteBatch:
    def __init__(self, session: Session, name: str):
        self.session = session
        self.name = name
        self._outermost = False

    def __enter__(self) -> "WriteBatch":
        depth = self.session.info.get(_DEPTH_KEY, 0)
        self._outermost = depth == 0
        self.session.info[_DEPTH_KEY] = depth + 1
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.session.info[_DEPTH_KEY] -= 1
        if not self._outermost:
            if exc_type is None:
                self.session.flush()
            return False

        if exc_type is not None:
            self.session.rollback()
            logger.warning("Write batch %r rolled back: %s", self.name, exc)
            return False

        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            logger.exception("Write batch %r failed to commit", self.name)
            raise
        return False

