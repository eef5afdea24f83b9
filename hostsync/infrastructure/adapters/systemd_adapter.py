"""
Systemd Adapter

Architectural Intent:
- Infrastructure adapter implementing ServiceSupervisorPort via systemctl
- Uses subprocess wrapped in async
- Never raises: a failed restart is logged and reported as False
"""

import asyncio
import logging
import subprocess
from hostsync.domain.ports.service_supervisor_port import ServiceSupervisorPort

logger = logging.getLogger(__name__)


class SystemdSupervisor(ServiceSupervisorPort):
    def __init__(self, use_sudo: bool = True) -> None:
        self.use_sudo = use_sudo

    def _argv(self, service_name: str) -> list[str]:
        argv = ["systemctl", "restart", service_name]
        return ["sudo"] + argv if self.use_sudo else argv

    async def restart(self, service_name: str) -> bool:
        def _restart():
            try:
                subprocess.run(
                    self._argv(service_name),
                    capture_output=True,
                    text=True,
                    check=True,
                )
                logger.info("Restarted %s", service_name)
                return True
            except FileNotFoundError:
                logger.warning("systemctl not found, cannot restart %s", service_name)
                return False
            except subprocess.CalledProcessError as e:
                logger.warning(
                    "Restart of %s failed (%d): %s",
                    service_name,
                    e.returncode,
                    (e.stderr or "").strip(),
                )
                return False

        return await asyncio.get_event_loop().run_in_executor(None, _restart)
