from tracker.repositories.base import ProjectDataRepository


def get_project_data_repository() -> ProjectDataRepository:
    from tracker.db import get_connection
    from tracker.repositories.sqlalchemy import SQLAlchemyProjectDataRepository

    return SQLAlchemyProjectDataRepository(get_connection())
