# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level LeakGuard controller: gate, scan, interpret, report."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager, suppress
from dataclasses import dataclass

from .config import ActionSettings, HttpSettings, load_http_settings
from .constants import SCAN_CRASH_EXIT_CODE
from .errors import LeakGuardError, ReportingFailure, UnsupportedEvent
from .gate.classifier import ActorClassifier
from .gate.keygen import KeygenLicenseValidator
from .gate.license import LicenseGate
from .github.client import GitHubClient
from .http.client import HttpClient, create_default_http_client
from .models.context import RunContext
from .models.outcome import Interpretation, OutcomeKind
from .report.reporter import Reporter
from .scan.engine import Engine, EngineResolver
from .scan.executor import ScanExecutor
from .scan.outcome import interpret
from .scan.runner import GitleaksRunner
from .scan.strategy import Strategy, select_strategy

logger = logging.getLogger(__name__)

ExecutorFactory = Callable[[Engine], ScanExecutor]


@dataclass
class _ReportSlot:
    interpretation: Interpretation | None = None


class LeakGuard:
    """
    Runs one scan for one event.

    Collaborators are built from the settings unless injected. The run is strictly
    sequential: classify, gate, select a strategy, resolve the engine, scan,
    interpret, report. Failures before the scan raise and skip reporting; once the
    scan stage starts, the reporter runs exactly once.
    """

    def __init__(
        self,
        settings: ActionSettings,
        *,
        http_client: HttpClient | None = None,
        http_settings: HttpSettings | None = None,
        github: GitHubClient | None = None,
        classifier: ActorClassifier | None = None,
        gate: LicenseGate | None = None,
        resolver: EngineResolver | None = None,
        executor_factory: ExecutorFactory | None = None,
        reporter: Reporter | None = None,
    ):
        self.settings = settings
        self.http_settings = http_settings or load_http_settings()
        self.http_client = http_client or create_default_http_client(self.http_settings)
        self.github = github or GitHubClient.from_settings(self.http_client, settings, http_settings=self.http_settings)
        self.classifier = classifier or ActorClassifier(self.github)
        self.gate = gate or LicenseGate(
            KeygenLicenseValidator(
                self.http_client,
                account=settings.keygen_account,
                http_settings=self.http_settings,
            )
        )
        self.resolver = resolver or EngineResolver(self.github, settings)
        self.executor_factory = executor_factory or self._default_executor
        self.reporter = reporter or Reporter()

    def _default_executor(self, engine: Engine) -> ScanExecutor:
        return ScanExecutor(GitleaksRunner(engine, self.settings), self.github)

    def prepare(self, ctx: RunContext) -> tuple[Strategy, Engine]:
        """
        Pre-scan steps. Raises GateFailure, UnsupportedEvent or EngineResolutionFailure.

        The license is only validated once the event is known to be scannable.
        """
        classification = self.classifier.classify(ctx.owner_login)
        decision = self.gate.check(classification, ctx)
        logger.debug("Gate decision for [%s]: %s", ctx.owner_login, decision.reason.value)

        strategy = select_strategy(ctx.event_kind)
        if strategy == Strategy.UNSUPPORTED:
            raise UnsupportedEvent(ctx.event_name)

        self.gate.validate(decision, ctx)
        engine = self.resolver.resolve()
        return strategy, engine

    @contextmanager
    def reporting(self, ctx: RunContext) -> Iterator[_ReportSlot]:
        """Guarantee a single report for whatever the scan stage produced."""
        slot = _ReportSlot()
        try:
            yield slot
        finally:
            interpretation = slot.interpretation or interpret(SCAN_CRASH_EXIT_CODE)
            try:
                self.reporter.report(interpretation, ctx)
            except Exception as exc:  # noqa: BLE001
                failure = exc if isinstance(exc, ReportingFailure) else ReportingFailure(str(exc))
                logger.error("Failed to write the run report: %s", failure)

    def scan(self, strategy: Strategy, engine: Engine, ctx: RunContext) -> Interpretation:
        with self.reporting(ctx) as slot:
            try:
                executor = self.executor_factory(engine)
                raw_code = executor.execute(strategy, ctx, upload_artifact=ctx.artifact_upload_enabled)
            except Exception as exc:  # noqa: BLE001
                logger.error("Scan failed before gitleaks reported a result: %s", exc)
                logger.debug("Scan failure details", exc_info=True)
                raw_code = SCAN_CRASH_EXIT_CODE
            slot.interpretation = interpret(raw_code)
        return slot.interpretation

    def run(self, ctx: RunContext) -> int:
        """Run the whole pipeline and return the process exit code."""
        try:
            strategy, engine = self.prepare(ctx)
        except LeakGuardError as exc:
            logger.error("%s", exc)
            return exc.exit_code

        interpretation = self.scan(strategy, engine, ctx)
        if interpretation.kind == OutcomeKind.CLEAN:
            logger.info(interpretation.message)
        elif interpretation.kind == OutcomeKind.LEAKS_DETECTED:
            logger.warning(interpretation.message)
        else:
            logger.error(interpretation.message)
        return interpretation.exit_code

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> LeakGuard:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


__all__ = ["LeakGuard"]
