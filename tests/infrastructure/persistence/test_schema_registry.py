"""Tests for the tenant schema module registry"""

import dataclasses

import pytest

from hrplatform.infrastructure.exceptions import SchemaModuleOrderError
from hrplatform.infrastructure.persistence.tenant_schema import TenantBase
from hrplatform.infrastructure.persistence.tenant_schema.registry import (
    TENANT_SCHEMA_MODULES, ordered_modules, validate_module_order)


class TestRegistry:
    def test_modules_are_declared_in_application_order(self):
        assert [module.name for module in TENANT_SCHEMA_MODULES] == [
            "Identity",
            "Company Settings",
            "Organization",
            "Employees",
            "Attendance",
            "Leave",
            "Performance",
            "Recruiting",
            "Benefits",
            "Training",
            "Onboarding/Offboarding",
            "Payroll",
            "Documents",
            "Announcements",
        ]
        assert ordered_modules(TENANT_SCHEMA_MODULES) == list(TENANT_SCHEMA_MODULES)

    def test_every_tenant_table_belongs_to_exactly_one_module(self):
        """
        GIVEN all tables declared on the tenant metadata
        WHEN collecting the tables of every module
        THEN each table appears once and none is left out
        """
        names = [name for module in TENANT_SCHEMA_MODULES for name in module.table_names]

        assert len(names) == len(set(names))
        assert set(names) == set(TenantBase.metadata.tables)
        assert len(names) >= 50

    def test_declared_order_satisfies_foreign_keys(self):
        validate_module_order(TENANT_SCHEMA_MODULES)


class TestValidateModuleOrder:
    def test_reference_to_same_tier_module_is_rejected(self):
        """
        GIVEN the Employees module moved down to tier 1 next to Organization
        WHEN validating the module order
        THEN SchemaModuleOrderError names the offending table
        """
        modules = [
            dataclasses.replace(module, tier=1) if module.name == "Employees" else module
            for module in TENANT_SCHEMA_MODULES
        ]

        with pytest.raises(SchemaModuleOrderError) as exc_info:
            validate_module_order(modules)

        assert exc_info.value.details["module"] == "Employees"
        assert exc_info.value.details["referenced_table"] in {"department", "position", "location"}

    def test_reference_to_missing_module_is_rejected(self):
        modules = [module for module in TENANT_SCHEMA_MODULES if module.name != "Organization"]

        with pytest.raises(SchemaModuleOrderError):
            validate_module_order(modules)

    def test_ordered_modules_sorts_by_tier_and_keeps_declaration_order(self):
        reversed_modules = list(reversed(TENANT_SCHEMA_MODULES))

        ordered = ordered_modules(reversed_modules)

        assert [module.tier for module in ordered] == sorted(module.tier for module in ordered)
        assert ordered[0].name == "Company Settings"
        assert ordered[1].name == "Identity"
