from sqlalchemy import delete, insert, select

from warden.models.security import Function, Role, function_role_association
from .base import BaseRepository


class RoleRepository(BaseRepository):
    model = Role

    async def find_all(self) -> list[Role]:
        return await self._scalars(select(Role).order_by(Role.name))

    async def get_role_codes(self) -> list[str]:
        return await self._scalars(select(Role.code).order_by(Role.code))

    async def delete_by_code(self, code: str) -> int:
        result = await self.db.execute(delete(Role).where(Role.code == code))
        return result.rowcount

    async def add_function_to_role(self, role_code: str, function_code: str) -> None:
        await self.db.execute(
            insert(function_role_association).values(
                role_code=role_code, function_code=function_code
            )
        )

    async def remove_function_from_role(self, role_code: str, function_code: str) -> int:
        result = await self.db.execute(
            delete(function_role_association).where(
                function_role_association.c.role_code == role_code,
                function_role_association.c.function_code == function_code,
            )
        )
        return result.rowcount

    async def function_to_role_mapping_exists(self, role_code: str, function_code: str) -> bool:
        return await self._exists(
            select(function_role_association.c.function_code).where(
                function_role_association.c.role_code == role_code,
                function_role_association.c.function_code == function_code,
            )
        )

    async def get_function_codes_by_role_code(self, role_code: str) -> list[str]:
        return await self._scalars(
            select(function_role_association.c.function_code)
            .where(function_role_association.c.role_code == role_code)
            .order_by(function_role_association.c.function_code)
        )


class FunctionRepository(BaseRepository):
    model = Function

    async def find_all(self) -> list[Function]:
        return await self._scalars(select(Function).order_by(Function.name))

    async def delete_by_code(self, code: str) -> int:
        result = await self.db.execute(delete(Function).where(Function.code == code))
        return result.rowcount
