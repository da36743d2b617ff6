from petcare.db.base import Base
from petcare.db.session import Database

# IMPORTANT: import models so they register with Base.metadata
import petcare.db.models  # noqa: F401


def init_db(database: Database) -> None:
    Base.metadata.create_all(bind=database.engine)
