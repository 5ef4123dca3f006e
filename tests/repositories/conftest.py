import pytest
from sqlalchemy import Connection

from tracker.repositories.sqlalchemy import SQLAlchemyProjectDataRepository


@pytest.fixture()
def project_repo(db_connection: Connection) -> SQLAlchemyProjectDataRepository:
    return SQLAlchemyProjectDataRepository(db_connection)
