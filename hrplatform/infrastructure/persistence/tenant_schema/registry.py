"""
Tenant schema modules in application order.

Each module groups the tables of one business area with the seed data that
belongs to them. Modules are applied sorted by (tier, declaration order); a
table may only reference tables of its own module or of a lower tier.

Tiers:
    0 - identity, company settings (no dependencies)
    1 - organization structure
    2 - employees
    3 - everything that hangs off employees
"""
from collections.abc import Sequence
from dataclasses import dataclass, field

from sqlalchemy import Table

from hrplatform.infrastructure.exceptions import SchemaModuleOrderError
from hrplatform.infrastructure.persistence.tenant_schema import (
    announcements, attendance, benefits, company, documents, employees, identity, leave,
    onboarding, organization, payroll, performance, recruiting, training)
from hrplatform.infrastructure.persistence.tenant_schema.seeds import (NaturalKeySeed,
                                                                       RoleGrantSeed, Seed)

SCHEMA_VERSION = "2024.1"


@dataclass(frozen=True)
class SchemaModule:
    """A named group of tenant tables and their seed data"""

    name: str
    tier: int
    tables: Sequence[Table]
    seeds: Sequence[Seed] = field(default_factory=tuple)

    @property
    def table_names(self) -> list[str]:
        return [table.name for table in self.tables]


def _tables(*models) -> tuple[Table, ...]:
    return tuple(model.__table__ for model in models)


TENANT_SCHEMA_MODULES: tuple[SchemaModule, ...] = (
    SchemaModule(
        name="Identity",
        tier=0,
        tables=_tables(
            identity.User,
            identity.Role,
            identity.Permission,
            identity.UserRole,
            identity.RolePermission,
            identity.RefreshToken,
        ),
        seeds=(
            NaturalKeySeed("roles", identity.Role.__table__, ("name",), identity.ROLE_ROWS),
            NaturalKeySeed(
                "permissions", identity.Permission.__table__, ("name",), identity.PERMISSION_ROWS
            ),
            RoleGrantSeed(
                "role permissions",
                role_table=identity.Role.__table__,
                permission_table=identity.Permission.__table__,
                grant_table=identity.RolePermission.__table__,
                grants=identity.ROLE_GRANTS,
            ),
        ),
    ),
    SchemaModule(
        name="Company Settings",
        tier=0,
        tables=_tables(company.CompanySetting, company.Holiday, company.WorkSchedule),
    ),
    SchemaModule(
        name="Organization",
        tier=1,
        tables=_tables(organization.Location, organization.Department, organization.Position),
    ),
    SchemaModule(
        name="Employees",
        tier=2,
        tables=_tables(
            employees.Employee,
            employees.EmployeeAddress,
            employees.EmergencyContact,
            employees.EmployeeDependent,
            employees.EmployeeBankAccount,
        ),
    ),
    SchemaModule(
        name="Attendance",
        tier=3,
        tables=_tables(
            attendance.Shift,
            attendance.AttendanceRecord,
            attendance.Timesheet,
            attendance.OvertimeRequest,
        ),
    ),
    SchemaModule(
        name="Leave",
        tier=3,
        tables=_tables(leave.LeaveType, leave.LeaveBalance, leave.LeaveRequest),
        seeds=(
            NaturalKeySeed(
                "leave types", leave.LeaveType.__table__, ("code",), leave.DEFAULT_LEAVE_TYPES
            ),
        ),
    ),
    SchemaModule(
        name="Performance",
        tier=3,
        tables=_tables(
            performance.ReviewCycle,
            performance.PerformanceReview,
            performance.Goal,
            performance.Feedback,
        ),
    ),
    SchemaModule(
        name="Recruiting",
        tier=3,
        tables=_tables(
            recruiting.JobOpening,
            recruiting.Candidate,
            recruiting.JobApplication,
            recruiting.Interview,
            recruiting.JobOffer,
        ),
    ),
    SchemaModule(
        name="Benefits",
        tier=3,
        tables=_tables(
            benefits.BenefitPlan,
            benefits.BenefitEnrollment,
            benefits.BenefitEnrollmentDependent,
        ),
    ),
    SchemaModule(
        name="Training",
        tier=3,
        tables=_tables(
            training.TrainingCourse,
            training.TrainingSession,
            training.TrainingEnrollment,
            training.Certification,
        ),
    ),
    SchemaModule(
        name="Onboarding/Offboarding",
        tier=3,
        tables=_tables(
            onboarding.ChecklistTemplate,
            onboarding.ChecklistTemplateTask,
            onboarding.EmployeeChecklist,
            onboarding.EmployeeChecklistTask,
        ),
    ),
    SchemaModule(
        name="Payroll",
        tier=3,
        tables=_tables(
            payroll.SalaryComponent,
            payroll.EmployeeSalary,
            payroll.EmployeeSalaryComponent,
            payroll.PayrollRun,
            payroll.Payslip,
            payroll.PayslipLine,
        ),
        seeds=(
            NaturalKeySeed(
                "salary components",
                payroll.SalaryComponent.__table__,
                ("code",),
                payroll.DEFAULT_SALARY_COMPONENTS,
            ),
        ),
    ),
    SchemaModule(
        name="Documents",
        tier=3,
        tables=_tables(documents.DocumentCategory, documents.Document),
        seeds=(
            NaturalKeySeed(
                "document categories",
                documents.DocumentCategory.__table__,
                ("name",),
                documents.DEFAULT_DOCUMENT_CATEGORIES,
            ),
        ),
    ),
    SchemaModule(
        name="Announcements",
        tier=3,
        tables=_tables(announcements.Announcement, announcements.AnnouncementRead),
    ),
)


def ordered_modules(modules: Sequence[SchemaModule]) -> list[SchemaModule]:
    """Sort modules by tier, keeping declaration order within a tier"""
    return [
        module
        for _, _, module in sorted(
            (module.tier, index, module) for index, module in enumerate(modules)
        )
    ]


def validate_module_order(modules: Sequence[SchemaModule]) -> None:
    """
    Check every foreign key points into the same module or a lower tier.

    Raises:
        SchemaModuleOrderError: naming the first offending table
    """
    tier_of_table: dict[str, int] = {}
    module_of_table: dict[str, str] = {}
    for module in modules:
        for table in module.tables:
            tier_of_table[table.name] = module.tier
            module_of_table[table.name] = module.name

    for module in modules:
        for table in module.tables:
            for foreign_key in table.foreign_keys:
                referenced = foreign_key.column.table.name
                if module_of_table.get(referenced) == module.name:
                    continue
                referenced_tier = tier_of_table.get(referenced)
                if referenced_tier is None or referenced_tier >= module.tier:
                    raise SchemaModuleOrderError(module.name, table.name, referenced)
