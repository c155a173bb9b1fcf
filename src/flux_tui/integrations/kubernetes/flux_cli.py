"""Flux CLI wrapper for reconcile and suspend/resume operations.

Wraps the flux binary via subprocess. The binary is resolved on first use
so the dashboard can start (and browse) on machines without it.
"""

from __future__ import annotations

import asyncio
import shutil
import subprocess
from pathlib import Path

import structlog

from flux_tui.core.interfaces import CommandRunner
from flux_tui.integrations.kubernetes.exceptions import KubernetesError
from flux_tui.integrations.kubernetes.models import ResourceKind

logger = structlog.get_logger()

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

FLUX_TIMEOUT_SECONDS = 300
VERSION_TIMEOUT_SECONDS = 10


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class FluxError(KubernetesError):
    """Base exception for flux CLI operations."""

    def __init__(
        self,
        message: str,
        stderr: str | None = None,
        stdout: str | None = None,
    ) -> None:
        super().__init__(message=message)
        self.stderr = stderr
        self.stdout = stdout


class FluxBinaryNotFoundError(FluxError):
    """Raised when the flux binary is not found."""

    def __init__(self) -> None:
        super().__init__(
            message=(
                "flux binary not found in PATH. Install from: https://fluxcd.io/flux/installation/"
            ),
        )


class FluxCommandError(FluxError):
    """Raised when a flux command exits non-zero."""


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class FluxCLI(CommandRunner):
    """Client for interacting with the flux CLI.

    Commands run in a worker thread so the event loop keeps rendering
    while flux waits for the controllers.
    """

    def __init__(
        self,
        binary_path: str | None = None,
        *,
        context: str | None = None,
        kubeconfig: str | None = None,
        timeout: int = FLUX_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize flux client.

        Args:
            binary_path: Optional explicit path to flux binary.
                If None, searches PATH on first use.
            context: Kubeconfig context passed as ``--context``.
            kubeconfig: Kubeconfig path passed as ``--kubeconfig``.
            timeout: Timeout in seconds for each command.
        """
        self._binary_path = binary_path
        self._binary: str | None = None
        self._context = context
        self._kubeconfig = kubeconfig
        self._timeout = timeout
        self._log = logger.bind(binary=binary_path or "flux")

    @staticmethod
    def _find_binary(binary_path: str | None) -> str:
        """Locate flux binary.

        Args:
            binary_path: Explicit path or None to search PATH.

        Returns:
            Path to flux binary.

        Raises:
            FluxBinaryNotFoundError: If not found.
        """
        if binary_path:
            path = Path(binary_path)
            if not path.exists():
                raise FluxBinaryNotFoundError()
            return str(path.resolve())

        found = shutil.which("flux")
        if not found:
            raise FluxBinaryNotFoundError()

        return found

    @property
    def binary(self) -> str:
        """Resolved flux binary path.

        Raises:
            FluxBinaryNotFoundError: If not found.
        """
        if self._binary is None:
            self._binary = self._find_binary(self._binary_path)
            self._log = logger.bind(binary=self._binary)
        return self._binary

    def is_available(self) -> bool:
        """Check whether the flux binary can be located."""
        try:
            self.binary
        except FluxBinaryNotFoundError:
            return False
        return True

    def _global_args(self) -> list[str]:
        args: list[str] = []
        if self._context:
            args.extend(["--context", self._context])
        if self._kubeconfig:
            args.extend(["--kubeconfig", self._kubeconfig])
        return args

    def _run(
        self,
        args: list[str],
        *,
        timeout: int | None = None,
    ) -> subprocess.CompletedProcess[str]:
        """Run a flux command.

        Args:
            args: Command arguments (without the ``flux`` prefix).
            timeout: Timeout in seconds, defaulting to the client timeout.

        Returns:
            CompletedProcess result.

        Raises:
            FluxBinaryNotFoundError: If the binary cannot be located.
            FluxCommandError: On non-zero exit.
            FluxError: On timeout or when the process cannot be started.
        """
        timeout = timeout or self._timeout
        cmd = [self.binary, *args, *self._global_args()]
        self._log.debug("running_flux_command", args=args)

        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                timeout=timeout,
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            stdout = (e.stdout or "").strip()
            raise FluxCommandError(
                message=f"Flux command failed: {stderr or f'exit code {e.returncode}'}"
                + (f"\n{stdout}" if stdout else ""),
                stderr=e.stderr,
                stdout=e.stdout,
            ) from e
        except subprocess.TimeoutExpired as e:
            raise FluxError(
                message=f"Flux command timed out after {timeout}s",
            ) from e
        except OSError as e:
            raise FluxError(
                message=f"Failed to execute flux command: {e}",
            ) from e

    # -----------------------------------------------------------------------
    # Version
    # -----------------------------------------------------------------------

    def get_version(self) -> str:
        """Get flux CLI version string.

        Returns:
            Version string (e.g., ``2.4.0``).

        Raises:
            FluxError: If version command fails.
        """
        result = self._run(["version", "--client"], timeout=VERSION_TIMEOUT_SECONDS)
        # "flux: v2.4.0"
        return result.stdout.strip().split()[-1].lstrip("v")

    # -----------------------------------------------------------------------
    # Reconciliation
    # -----------------------------------------------------------------------

    def reconcile_sync(
        self,
        name: str,
        namespace: str,
        kind: ResourceKind,
        with_source: bool = False,
    ) -> None:
        """Run ``flux reconcile`` and wait for it to finish.

        Args:
            name: Resource name.
            namespace: Resource namespace.
            kind: Resource kind.
            with_source: Also reconcile the resource's source first. Ignored
                for kinds that have no such option.

        Raises:
            FluxError: If the command fails.
        """
        args = ["reconcile", *kind.cli_noun.split(), name, "-n", namespace]
        if with_source and kind.supports_with_source:
            args.append("--with-source")

        self._run(args)
        self._log.info("flux_reconcile_success", kind=kind.value, name=name, namespace=namespace)

    def toggle_suspend_sync(
        self,
        name: str,
        namespace: str,
        kind: ResourceKind,
        currently_suspended: bool,
    ) -> None:
        """Run ``flux resume`` or ``flux suspend`` depending on current state.

        Args:
            name: Resource name.
            namespace: Resource namespace.
            kind: Resource kind.
            currently_suspended: Whether the resource is suspended now.

        Raises:
            FluxError: If the kind cannot be suspended or the command fails.
        """
        if not kind.supports_suspend:
            raise FluxError(message=f"{kind.value} resources cannot be suspended")

        action = "resume" if currently_suspended else "suspend"
        self._run([action, *kind.cli_noun.split(), name, "-n", namespace])
        self._log.info(f"flux_{action}_success", kind=kind.value, name=name, namespace=namespace)

    async def reconcile(
        self,
        name: str,
        namespace: str,
        kind: ResourceKind,
        with_source: bool = False,
    ) -> None:
        await asyncio.to_thread(self.reconcile_sync, name, namespace, kind, with_source)

    async def toggle_suspend(
        self,
        name: str,
        namespace: str,
        kind: ResourceKind,
        currently_suspended: bool,
    ) -> None:
        await asyncio.to_thread(
            self.toggle_suspend_sync, name, namespace, kind, currently_suspended
        )
