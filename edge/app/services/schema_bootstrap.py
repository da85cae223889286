"""Cold-start schema bootstrap for the secondary datastore.

State machine::

    UNINITIALIZED -> READY                              (schema RPC succeeded)
    UNINITIALIZED -> FALLBACK_CHECK -> READY | DEGRADED (schema RPC failed, tables probed)

After either path the reference table is probed and seeded when empty. The
presence of any row is the seed marker. When the seed RPC fails, the built-in
basic services are inserted directly instead. Probe and seed are not
transactional, so two instances starting together may both seed.

Nothing here raises to the caller: every failure is logged and folded into the
returned BootstrapReport. Routes keep serving (with fallback content) whatever
the outcome.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from loguru import logger

from edge.app.constants import REFERENCE_TABLE, REQUIRED_TABLES
from edge.app.core import SERVICE_NAME
from edge.app.ports.baas_client import BaasClient
from edge.app.services.fallback_content import basic_services


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def _warn(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).warning("")


class SchemaState(str, Enum):
    UNINITIALIZED = "UNINITIALIZED"
    FALLBACK_CHECK = "FALLBACK_CHECK"
    READY = "READY"
    DEGRADED = "DEGRADED"


class SeedOutcome(str, Enum):
    NOT_RUN = "NOT_RUN"
    SEEDED = "SEEDED"
    SEEDED_BASIC = "SEEDED_BASIC"
    ALREADY_SEEDED = "ALREADY_SEEDED"
    SKIPPED_UNREACHABLE = "SKIPPED_UNREACHABLE"
    FAILED = "FAILED"


@dataclass
class BootstrapReport:
    state: SchemaState = SchemaState.UNINITIALIZED
    existing_tables: list[str] = field(default_factory=list)
    missing_tables: list[str] = field(default_factory=list)
    seed_outcome: SeedOutcome = SeedOutcome.NOT_RUN


class SchemaBootstrapper:
    def __init__(
        self,
        client: BaasClient,
        *,
        schema_rpc: str = "initialize_complete_schema",
        seed_rpc: str = "seed_services_and_packages",
        required_tables: Iterable[str] = REQUIRED_TABLES,
        reference_table: str = REFERENCE_TABLE,
    ) -> None:
        self._client = client
        self._schema_rpc = schema_rpc
        self._seed_rpc = seed_rpc
        self._required_tables = tuple(required_tables)
        self._reference_table = reference_table
        self._report = BootstrapReport()

    @property
    def report(self) -> BootstrapReport:
        return self._report

    async def run(self) -> BootstrapReport:
        report = BootstrapReport()
        self._report = report

        await self._initialize_schema(report)

        report.seed_outcome = await self.seed_reference_data()
        if report.seed_outcome == SeedOutcome.SKIPPED_UNREACHABLE:
            report.state = SchemaState.DEGRADED

        _log(
            "schema_bootstrap_finished",
            state=report.state.value,
            seed_outcome=report.seed_outcome.value,
            missing_tables=report.missing_tables,
        )
        return report

    async def _initialize_schema(self, report: BootstrapReport) -> None:
        _log("schema_initializing", rpc=self._schema_rpc)
        try:
            await self._client.rpc(self._schema_rpc)
        except Exception as exc:
            _warn("schema_rpc_failed", rpc=self._schema_rpc, error=str(exc))
            report.state = SchemaState.FALLBACK_CHECK
            await self._probe_tables(report)
            return

        report.state = SchemaState.READY
        report.existing_tables = list(self._required_tables)
        _log("schema_initialized")

    async def _probe_tables(self, report: BootstrapReport) -> None:
        """Probe every required table; a failed probe never stops the rest."""
        for table in self._required_tables:
            try:
                await self._client.select(table, "id", limit=1)
            except Exception as exc:
                report.missing_tables.append(table)
                _warn("table_probe_failed", table=table, error=str(exc))
                continue
            report.existing_tables.append(table)
            _log("table_exists", table=table)

        if report.missing_tables:
            report.state = SchemaState.DEGRADED
            _warn("schema_degraded", missing_tables=report.missing_tables)
        else:
            report.state = SchemaState.READY
            _log("fallback_schema_check_completed")

    async def seed_reference_data(self) -> SeedOutcome:
        """Seed the reference table once; any existing row makes this a no-op."""
        try:
            rows = await self._client.select(self._reference_table, "id", limit=1)
        except Exception as exc:
            _warn("seed_skipped_table_unreachable", table=self._reference_table, error=str(exc))
            return SeedOutcome.SKIPPED_UNREACHABLE

        if rows:
            _log("seed_skipped_already_present", table=self._reference_table)
            return SeedOutcome.ALREADY_SEEDED

        try:
            await self._client.rpc(self._seed_rpc)
        except Exception as exc:
            _warn("seed_failed", rpc=self._seed_rpc, error=str(exc))
            return await self._seed_basic_services()

        _log("seed_completed", rpc=self._seed_rpc)
        return SeedOutcome.SEEDED

    async def _seed_basic_services(self) -> SeedOutcome:
        """Insert the built-in services one by one; a failed insert does not stop the rest."""
        seeded = 0
        for service in basic_services():
            try:
                await self._client.insert(self._reference_table, service)
            except Exception as exc:
                _warn("basic_seed_insert_failed", slug=service["slug"], error=str(exc))
                continue
            seeded += 1
            _log("basic_service_seeded", slug=service["slug"])

        if not seeded:
            return SeedOutcome.FAILED
        _log("basic_seed_completed", count=seeded)
        return SeedOutcome.SEEDED_BASIC
