"""
Apt Adapter

Architectural Intent:
- Infrastructure adapter implementing PackageManagerPort via apt-get
- Uses subprocess wrapped in async
- Non-interactive upgrade; failures raise PackageManagerError
"""

import asyncio
import logging
import os
import subprocess
from hostsync.domain.exceptions import PackageManagerError
from hostsync.domain.ports.package_manager_port import PackageManagerPort

logger = logging.getLogger(__name__)


class AptPackageManager(PackageManagerPort):
    def __init__(self, use_sudo: bool = True) -> None:
        self.use_sudo = use_sudo

    async def _apt(self, *args: str) -> None:
        argv = ["apt-get", *args]
        if self.use_sudo:
            argv = ["sudo", "DEBIAN_FRONTEND=noninteractive"] + argv

        def _run():
            logger.info("Running %s", " ".join(argv))
            try:
                subprocess.run(
                    argv,
                    capture_output=True,
                    text=True,
                    check=True,
                    env=dict(os.environ, DEBIAN_FRONTEND="noninteractive"),
                )
            except FileNotFoundError as e:
                raise PackageManagerError(f"{argv[0]} not found") from e
            except subprocess.CalledProcessError as e:
                raise PackageManagerError(
                    f"apt-get {' '.join(args)} failed ({e.returncode}): "
                    f"{(e.stderr or '').strip()}"
                ) from e

        await asyncio.get_event_loop().run_in_executor(None, _run)

    async def refresh_index(self) -> None:
        await self._apt("update")

    async def upgrade(self) -> None:
        await self._apt("-y", "upgrade")
