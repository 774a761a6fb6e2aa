"""SQLAlchemy-backed acronym store.

Design Decisions:

1. Session Factory, not Session:
   - The store takes an ``async_sessionmaker`` and opens one short session
     per call
   - Rationale: editor lookups and background generation interleave; a
     shared session would couple their transactions
   - Trade-off: one connection checkout per call vs. simpler lifecycle

2. Error Mapping:
   - IntegrityError on the unique label -> DuplicateAcronymError
   - Any other SQLAlchemyError -> StoreError (chained with ``from``)
   - Callers only ever see the store exception hierarchy

3. Ordering:
   - usage_count DESC, id ASC (id increases with insertion order)
"""

from datetime import UTC, datetime

from sqlalchemy import Select, delete, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from acronym_assist.logging_config import get_logger
from acronym_assist.models import Acronym, Prompt
from acronym_assist.schemas import AcronymCreate, AcronymRecord, AcronymUpdate, CapturedEntry

from .base import AcronymStore, StoreCapability
from .exceptions import AcronymNotFoundError, DuplicateAcronymError, EntryNotFoundError, StoreError

logger = get_logger(__name__)


class SqlAlchemyAcronymStore(AcronymStore):
    """Store persisting acronyms and captured prompts through SQLAlchemy.

    Usage:
        engine = create_engine("sqlite+aiosqlite:///acronyms.db")
        await init_models(engine)
        store = SqlAlchemyAcronymStore(create_session_factory(engine))
    """

    capabilities = StoreCapability.ALL

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    @staticmethod
    def _ordered(stmt: Select[tuple[Acronym]]) -> Select[tuple[Acronym]]:
        return stmt.order_by(Acronym.usage_count.desc(), Acronym.id.asc())

    async def search_acronyms(self, query: str) -> list[AcronymRecord]:
        stmt = self._ordered(
            select(Acronym).where(
                or_(
                    Acronym.acronym.icontains(query, autoescape=True),
                    Acronym.expansion.icontains(query, autoescape=True),
                    Acronym.description.icontains(query, autoescape=True),
                )
            )
        )
        try:
            async with self.session_factory() as session:
                rows = (await session.execute(stmt)).scalars().all()
        except SQLAlchemyError as e:
            raise StoreError(f"Acronym search failed: {e}") from e
        return [AcronymRecord.model_validate(row) for row in rows]

    async def get_all_acronyms(self) -> list[AcronymRecord]:
        try:
            async with self.session_factory() as session:
                rows = (await session.execute(self._ordered(select(Acronym)))).scalars().all()
        except SQLAlchemyError as e:
            raise StoreError(f"Loading acronyms failed: {e}") from e
        return [AcronymRecord.model_validate(row) for row in rows]

    async def get_acronym(self, acronym_id: int) -> AcronymRecord | None:
        try:
            async with self.session_factory() as session:
                row = await session.get(Acronym, acronym_id)
        except SQLAlchemyError as e:
            raise StoreError(f"Loading acronym {acronym_id} failed: {e}") from e
        return AcronymRecord.model_validate(row) if row is not None else None

    async def add_acronym(self, data: AcronymCreate) -> AcronymRecord:
        row = Acronym(
            acronym=data.acronym,
            expansion=data.expansion,
            description=data.description,
            is_enabled=data.is_enabled,
            tags=list(data.tags),
            usage_count=0,
        )
        try:
            async with self.session_factory() as session:
                session.add(row)
                await session.commit()
                await session.refresh(row)
        except IntegrityError as e:
            raise DuplicateAcronymError(data.acronym) from e
        except SQLAlchemyError as e:
            raise StoreError(f"Creating acronym {data.acronym} failed: {e}") from e

        logger.debug("acronym_added", acronym_id=row.id, acronym=row.acronym)
        return AcronymRecord.model_validate(row)

    async def increment_usage(self, acronym_id: int) -> None:
        stmt = (
            update(Acronym)
            .where(Acronym.id == acronym_id)
            .values(usage_count=Acronym.usage_count + 1)
        )
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"Incrementing usage of {acronym_id} failed: {e}") from e
        if result.rowcount == 0:
            raise AcronymNotFoundError(acronym_id)

    async def update_acronym(self, acronym_id: int, updates: AcronymUpdate) -> AcronymRecord:
        changes = updates.changes()
        try:
            async with self.session_factory() as session:
                row = await session.get(Acronym, acronym_id)
                if row is None:
                    raise AcronymNotFoundError(acronym_id)
                for field, value in changes.items():
                    setattr(row, field, value)
                # Set explicitly so the returned record reflects the change
                row.updated_at = datetime.now(UTC)
                await session.commit()
                await session.refresh(row)
        except IntegrityError as e:
            raise DuplicateAcronymError(str(changes.get("acronym"))) from e
        except SQLAlchemyError as e:
            raise StoreError(f"Updating acronym {acronym_id} failed: {e}") from e
        return AcronymRecord.model_validate(row)

    async def delete_acronym(self, acronym_id: int) -> None:
        try:
            async with self.session_factory() as session:
                await session.execute(delete(Acronym).where(Acronym.id == acronym_id))
                await session.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"Deleting acronym {acronym_id} failed: {e}") from e

    async def clear_acronyms(self) -> None:
        try:
            async with self.session_factory() as session:
                await session.execute(delete(Acronym))
                await session.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"Clearing acronyms failed: {e}") from e

    async def add_captured_entry(self, content: str) -> CapturedEntry:
        row = Prompt(content=content, processed=False)
        try:
            async with self.session_factory() as session:
                session.add(row)
                await session.commit()
                await session.refresh(row)
        except SQLAlchemyError as e:
            raise StoreError(f"Capturing prompt failed: {e}") from e
        return CapturedEntry.model_validate(row)

    async def get_captured_entry(self, entry_id: int) -> CapturedEntry | None:
        try:
            async with self.session_factory() as session:
                row = await session.get(Prompt, entry_id)
        except SQLAlchemyError as e:
            raise StoreError(f"Loading prompt {entry_id} failed: {e}") from e
        return CapturedEntry.model_validate(row) if row is not None else None

    async def get_unprocessed_entries(self) -> list[CapturedEntry]:
        stmt = (
            select(Prompt)
            .where(Prompt.processed.is_(False))
            .order_by(Prompt.id.asc())
        )
        try:
            async with self.session_factory() as session:
                rows = (await session.execute(stmt)).scalars().all()
        except SQLAlchemyError as e:
            raise StoreError(f"Loading unprocessed prompts failed: {e}") from e
        return [CapturedEntry.model_validate(row) for row in rows]

    async def mark_entry_processed(self, entry_id: int) -> None:
        stmt = update(Prompt).where(Prompt.id == entry_id).values(processed=True)
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"Marking prompt {entry_id} processed failed: {e}") from e
        if result.rowcount == 0:
            raise EntryNotFoundError(entry_id)
