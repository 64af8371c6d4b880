"""
Minimal saga runner for tenant provisioning.

Steps run strictly in sequence. Each completed step may register a
compensation; on failure the compensations of completed steps run in
reverse order. A failing compensation is logged and never masks the error
that triggered the rollback.
"""
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from hrplatform.domain.enums import ProvisioningStep


@dataclass(frozen=True)
class SagaStep:
    """A named provisioning action and its optional compensation"""

    name: ProvisioningStep
    action: Callable[[], Awaitable[Any]]
    compensation: Callable[[], Awaitable[None]] | None = None


class ProvisioningSaga:
    def __init__(self, tenant_code: str, logger: logging.Logger):
        self.tenant_code = tenant_code
        self.logger = logger
        self.completed: list[SagaStep] = []
        self.current: ProvisioningStep | None = None

    async def run(self, step: SagaStep) -> Any:
        self.current = step.name
        self.logger.info(f"[{self.tenant_code}] {step.name.value} started")
        result = await step.action()
        self.completed.append(step)
        self.logger.info(f"[{self.tenant_code}] {step.name.value} finished")
        return result

    async def compensate(self) -> None:
        for step in reversed(self.completed):
            if step.compensation is None:
                continue
            self.logger.warning(f"[{self.tenant_code}] compensating {step.name.value}")
            try:
                await step.compensation()
            except Exception:
                self.logger.exception(
                    f"[{self.tenant_code}] compensation for {step.name.value} failed"
                )
