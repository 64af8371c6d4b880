"""
Idempotent seed data for tenant databases.

Seeds insert only the rows whose natural key is not already present, so
re-applying a schema module never duplicates reference data.
"""
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from sqlalchemy import Table, select
from sqlalchemy.ext.asyncio import AsyncConnection


class Seed(Protocol):
    """Protocol for seed steps run inside a schema module transaction"""

    name: str

    async def apply(self, conn: AsyncConnection) -> int:
        """Insert missing rows, return how many were inserted"""
        ...


@dataclass(frozen=True)
class NaturalKeySeed:
    """
    Rows keyed by one or more natural-key columns.

    Example:
        NaturalKeySeed(
            name="leave types",
            table=LeaveType.__table__,
            key=("code",),
            rows=[{"code": "AL", "name": "Annual Leave", "default_days": 20}],
        )
    """

    name: str
    table: Table
    key: tuple[str, ...]
    rows: Sequence[Mapping[str, Any]]

    async def apply(self, conn: AsyncConnection) -> int:
        key_columns = [self.table.c[column] for column in self.key]
        result = await conn.execute(select(*key_columns))
        existing = {tuple(row) for row in result}

        missing = [
            dict(row) for row in self.rows if tuple(row[column] for column in self.key) not in existing
        ]
        # Insert one row at a time so Python-side defaults (ids) are generated per row
        for row in missing:
            await conn.execute(self.table.insert().values(**row))
        return len(missing)


@dataclass(frozen=True)
class RoleGrantSeed:
    """
    Default role -> permission grants.

    Patterns are permission names, "<module>.*" for every permission of a
    module, or "*" for all permissions. Each (role, permission) pair is
    inserted at most once.
    """

    name: str
    role_table: Table
    permission_table: Table
    grant_table: Table
    grants: Mapping[str, Sequence[str]] = field(default_factory=dict)

    async def apply(self, conn: AsyncConnection) -> int:
        roles = {
            row.name: row.id
            for row in await conn.execute(select(self.role_table.c.id, self.role_table.c.name))
        }
        permissions = {
            row.name: row.id
            for row in await conn.execute(
                select(self.permission_table.c.id, self.permission_table.c.name)
            )
        }
        existing = {
            (row.role_id, row.permission_id)
            for row in await conn.execute(
                select(self.grant_table.c.role_id, self.grant_table.c.permission_id)
            )
        }

        inserted = 0
        for role_name, patterns in self.grants.items():
            role_id = roles.get(role_name)
            if role_id is None:
                continue
            for permission_name in expand_permission_patterns(patterns, permissions):
                pair = (role_id, permissions[permission_name])
                if pair in existing:
                    continue
                await conn.execute(
                    self.grant_table.insert().values(role_id=pair[0], permission_id=pair[1])
                )
                existing.add(pair)
                inserted += 1
        return inserted


def expand_permission_patterns(
    patterns: Sequence[str], permissions: Mapping[str, Any]
) -> list[str]:
    """Resolve permission patterns to concrete permission names, in catalog order"""
    matched: list[str] = []
    for pattern in patterns:
        if pattern == "*":
            candidates = list(permissions)
        elif pattern.endswith(".*"):
            prefix = pattern[:-1]
            candidates = [name for name in permissions if name.startswith(prefix)]
        else:
            candidates = [pattern] if pattern in permissions else []
        matched.extend(name for name in candidates if name not in matched)
    return matched

