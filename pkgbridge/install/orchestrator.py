"""
Install orchestration: idempotent, fallback-ordered package installation.
"""

from typing import Iterable, List, Union

from loguru import logger

from pkgbridge.backends.base import Backend, Existence
from pkgbridge.core.detector import HostContext
from pkgbridge.install.catalog import HostCatalog
from pkgbridge.install.models import (
    AttemptResult,
    BackendAttempt,
    InstallOutcome,
    InstallState,
    PackageRequest,
)


class InstallOrchestrator:
    """
    Walk the catalog's candidates for a host until a package is present.

    For each candidate backend: skip it if its executable is missing, stop
    if the package is already installed, skip it if its index does not have
    the package, otherwise install. A failed install moves on to the next
    backend; only exhausting every candidate is a failure. Each backend gets
    at most one install command per call, and backends are never tried in
    parallel.
    """

    def __init__(self, catalog: HostCatalog, probe, app_logger=None):
        self.catalog = catalog
        self.probe = probe
        self.logger = app_logger or logger

    def ensure(
        self,
        request: Union[PackageRequest, str],
        host: HostContext,
    ) -> InstallOutcome:
        """
        Ensure a package is installed.

        Args:
            request: Package request or plain package name
            host: Detected host context

        Returns:
            InstallOutcome describing the final state and every attempt
        """
        if isinstance(request, str):
            request = PackageRequest(name=request)

        candidates = self.catalog.candidates_for(host)
        self.logger.debug(
            f"Candidates for {request.name}: {', '.join(b.name for b in candidates) or 'none'}"
        )
        return self.ensure_with(request, candidates)

    def ensure_with(
        self,
        request: PackageRequest,
        candidates: Iterable[Backend],
    ) -> InstallOutcome:
        """Run the fallback walk over an explicit candidate list."""
        attempts: List[BackendAttempt] = []

        for backend in candidates:
            if not self.probe.available(backend.executable):
                self.logger.debug(f"{backend.name} not available, skipping")
                attempts.append(BackendAttempt(
                    backend=backend.name,
                    result=AttemptResult.BACKEND_UNAVAILABLE,
                ))
                continue

            outcome = self._try_backend(request, backend, attempts)
            if outcome is not None:
                return outcome

        any_available = any(
            a.result != AttemptResult.BACKEND_UNAVAILABLE for a in attempts
        )
        state = InstallState.FAILED if any_available else InstallState.BACKEND_UNAVAILABLE
        self.logger.error(
            f"Unable to install {request.name}: "
            + (", ".join(f"{a.backend}={a.result.value}" for a in attempts) or "no candidate managers")
        )
        return InstallOutcome(package=request.name, state=state, attempts=attempts)

    def ensure_many(
        self,
        requests: Iterable[Union[PackageRequest, str]],
        host: HostContext,
    ) -> List[InstallOutcome]:
        """Ensure several packages, one after another."""
        return [self.ensure(request, host) for request in requests]

    def _try_backend(
        self,
        request: PackageRequest,
        backend: Backend,
        attempts: List[BackendAttempt],
    ):
        """Try every name on one backend; return an outcome if it settles the request."""
        for pkg in request.names_for(backend.name):
            if backend.is_installed(pkg):
                self.logger.info(f"- {pkg} already installed ({backend.name})")
                attempts.append(BackendAttempt(
                    backend=backend.name,
                    package=pkg,
                    result=AttemptResult.ALREADY_PRESENT,
                ))
                return InstallOutcome(
                    package=request.name,
                    backend=backend.name,
                    state=InstallState.ALREADY_PRESENT,
                    attempts=attempts,
                )

            existence = backend.exists(pkg)
            if existence == Existence.ABSENT:
                attempts.append(BackendAttempt(
                    backend=backend.name,
                    package=pkg,
                    result=AttemptResult.NOT_FOUND,
                    detail=f"{pkg} not found in {backend.name} index",
                ))
                continue
            if existence == Existence.INCONCLUSIVE:
                self.logger.warning(f"{backend.name}: existence check for {pkg} errored")
                attempts.append(BackendAttempt(
                    backend=backend.name,
                    package=pkg,
                    result=AttemptResult.EXISTENCE_INCONCLUSIVE,
                    detail="index query failed to run",
                ))
                continue

            self.logger.info(f"- installing {pkg} using {backend.name}")
            if backend.install(pkg):
                attempts.append(BackendAttempt(
                    backend=backend.name,
                    package=pkg,
                    result=AttemptResult.INSTALLED,
                ))
                self.logger.success(f"- installed {pkg} using {backend.name}")
                return InstallOutcome(
                    package=request.name,
                    backend=backend.name,
                    state=InstallState.INSTALLED,
                    attempts=attempts,
                )

            attempts.append(BackendAttempt(
                backend=backend.name,
                package=pkg,
                result=AttemptResult.INSTALL_FAILED,
                detail=f"{backend.name} install {pkg} exited non-zero",
            ))
            return None

        return None
