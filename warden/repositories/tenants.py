from uuid import UUID

from sqlalchemy import delete, insert, select

from warden.models.security import (
    SortDirection,
    Tenant,
    UserDirectory,
    tenant_user_directory_association,
)
from .base import BaseRepository, contains_ignore_case, equals_ignore_case, ordered


class TenantRepository(BaseRepository):
    model = Tenant

    async def exists_by_name_ignore_case(self, name: str) -> bool:
        return await self._exists(
            select(Tenant.tenant_id).where(equals_ignore_case(Tenant.name, name))
        )

    async def get_name_by_id(self, tenant_id: UUID) -> str | None:
        return await self._first(select(Tenant.name).where(Tenant.tenant_id == tenant_id))

    async def delete_by_id(self, tenant_id: UUID) -> int:
        result = await self.db.execute(delete(Tenant).where(Tenant.tenant_id == tenant_id))
        return result.rowcount

    async def find_all(self) -> list[Tenant]:
        return await self._scalars(select(Tenant).order_by(Tenant.name))

    def _filtered(self, filter: str | None):
        stmt = select(Tenant)
        if filter:
            stmt = stmt.where(contains_ignore_case(Tenant.name, filter))
        return stmt

    async def find_filtered(
        self,
        filter: str | None = None,
        sort_direction: SortDirection | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Tenant]:
        stmt = self._filtered(filter).order_by(ordered(Tenant.name, sort_direction)).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return await self._scalars(stmt)

    async def count_filtered(self, filter: str | None = None) -> int:
        return await self._count(self._filtered(filter))

    # ── user directories ───────────────────────────────────────────────

    async def add_user_directory_to_tenant(self, tenant_id: UUID, user_directory_id: UUID) -> None:
        await self.db.execute(
            insert(tenant_user_directory_association).values(
                tenant_id=tenant_id, user_directory_id=user_directory_id
            )
        )

    async def remove_user_directory_from_tenant(
        self, tenant_id: UUID, user_directory_id: UUID
    ) -> int:
        result = await self.db.execute(
            delete(tenant_user_directory_association).where(
                tenant_user_directory_association.c.tenant_id == tenant_id,
                tenant_user_directory_association.c.user_directory_id == user_directory_id,
            )
        )
        return result.rowcount

    async def user_directory_to_tenant_mapping_exists(
        self, tenant_id: UUID, user_directory_id: UUID
    ) -> bool:
        return await self._exists(
            select(tenant_user_directory_association.c.tenant_id).where(
                tenant_user_directory_association.c.tenant_id == tenant_id,
                tenant_user_directory_association.c.user_directory_id == user_directory_id,
            )
        )

    async def get_user_directory_ids_by_tenant_id(self, tenant_id: UUID) -> list[UUID]:
        return await self._scalars(
            select(tenant_user_directory_association.c.user_directory_id)
            .join(
                UserDirectory,
                UserDirectory.user_directory_id
                == tenant_user_directory_association.c.user_directory_id,
            )
            .where(tenant_user_directory_association.c.tenant_id == tenant_id)
            .order_by(UserDirectory.name)
        )

    async def get_tenant_ids_by_user_directory_id(self, user_directory_id: UUID) -> list[UUID]:
        return await self._scalars(
            select(tenant_user_directory_association.c.tenant_id)
            .join(Tenant, Tenant.tenant_id == tenant_user_directory_association.c.tenant_id)
            .where(tenant_user_directory_association.c.user_directory_id == user_directory_id)
            .order_by(Tenant.name)
        )

    async def find_by_user_directory_id(self, user_directory_id: UUID) -> list[Tenant]:
        return await self._scalars(
            select(Tenant)
            .join(
                tenant_user_directory_association,
                tenant_user_directory_association.c.tenant_id == Tenant.tenant_id,
            )
            .where(tenant_user_directory_association.c.user_directory_id == user_directory_id)
            .order_by(Tenant.name)
        )
