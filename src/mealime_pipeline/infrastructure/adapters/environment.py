from __future__ import annotations

import os
from collections.abc import Mapping

from mealime_pipeline.application.ports.environment_port import StorageProbePort


class EnvironmentStorageProbe(StorageProbePort):
    """Read-only deployments (e.g. Deno Deploy style edge runtimes) announce
    themselves through an environment variable; there the cookie jar lives
    in memory only.
    """

    def __init__(
        self,
        deployment_env_var: str = "DENO_DEPLOYMENT_ID",
        *,
        persist: bool = True,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._var = deployment_env_var
        self._persist = persist
        self._environ = os.environ if environ is None else environ

    def has_persistent_storage(self) -> bool:
        return self._persist and self._environ.get(self._var) is None
