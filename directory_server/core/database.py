# directory_server/core/database.py
import logging
from typing import List, Optional
from contextlib import asynccontextmanager

from sqlalchemy import func, inspect
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.future import select
from sqlalchemy.sql import delete, update

from directory_server.core.errors import ConflictError, NotFoundError, StoreError
from directory_server.models.model import Base, Employee
from directory_server.schemas.schema import EmployeeRecord

logger = logging.getLogger(__name__)


class EmployeeStore:
    """Persistence for employee records.

    Every operation runs in its own session and commits a single statement.
    Rows leave the store as EmployeeRecord values, never as ORM objects.
    """

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.engine = create_async_engine(
            database_url,
            echo=echo,
            pool_pre_ping=True,
        )
        self.async_session = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def _session(self, failure_message: str):
        async with self.async_session() as session:
            try:
                yield session
            except IntegrityError as e:
                await session.rollback()
                logger.warning(f"Unique constraint rejected write: {str(e.orig)}")
                raise ConflictError() from e
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"{failure_message}: {str(e)}")
                raise StoreError(failure_message) from e

    async def init_db(self) -> None:
        try:
            async with self.engine.begin() as conn:
                existing_tables = await conn.run_sync(
                    lambda sync_conn: inspect(sync_conn).get_table_names()
                )

                if Employee.__tablename__ not in existing_tables:
                    await conn.run_sync(Base.metadata.create_all)
                    logger.info("Employees table created")
                else:
                    logger.info("Employees table already exists")
        except Exception as e:
            logger.error(f"Database initialization error: {str(e)}")
            raise

        logger.info("Database ready")

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("Database connections closed")

    async def list_all(self) -> List[EmployeeRecord]:
        async with self._session("Failed to fetch employees") as session:
            result = await session.execute(
                select(Employee).order_by(Employee.created_at.desc(), Employee.id.desc())
            )
            return [EmployeeRecord.model_validate(row) for row in result.scalars().all()]

    async def get(self, employee_id: int,
                  failure_message: str = "Failed to fetch employee") -> Optional[EmployeeRecord]:
        async with self._session(failure_message) as session:
            result = await session.execute(
                select(Employee).where(Employee.id == employee_id)
            )
            row = result.scalars().first()
            return EmployeeRecord.model_validate(row) if row else None

    async def _fetch_written(self, employee_id: int, failure_message: str) -> EmployeeRecord:
        employee = await self.get(employee_id, failure_message)
        if employee is None:
            # Removed between the write and the read
            raise NotFoundError()
        return employee

    async def create(self, name: str, email: str, position: str) -> EmployeeRecord:
        async with self._session("Failed to create employee") as session:
            db_obj = Employee(name=name, email=email, position=position)
            session.add(db_obj)
            await session.commit()
            employee_id = db_obj.id

        logger.info(f"Employee created: {employee_id}")
        return await self._fetch_written(employee_id, "Employee created but failed to fetch")

    async def update(self, employee_id: int, name: str, email: str, position: str) -> EmployeeRecord:
        async with self._session("Failed to update employee") as session:
            result = await session.execute(
                update(Employee)
                .where(Employee.id == employee_id)
                .values(name=name, email=email, position=position, updated_at=func.now())
                .execution_options(synchronize_session=False)
            )
            await session.commit()

        if result.rowcount == 0:
            raise NotFoundError()

        logger.info(f"Employee updated: {employee_id}")
        return await self._fetch_written(employee_id, "Employee updated but failed to fetch")

    async def delete(self, employee_id: int) -> bool:
        async with self._session("Failed to delete employee") as session:
            result = await session.execute(
                delete(Employee).where(Employee.id == employee_id)
            )
            await session.commit()

        deleted = result.rowcount > 0
        if deleted:
            logger.info(f"Employee deleted: {employee_id}")
        return deleted
