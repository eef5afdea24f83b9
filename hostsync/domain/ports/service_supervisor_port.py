"""
Service Supervisor Port

Architectural Intent:
- Port interface for restarting host services
- Best-effort: implementations report failure through the return value
"""

from abc import ABC, abstractmethod


class ServiceSupervisorPort(ABC):
    @abstractmethod
    async def restart(self, service_name: str) -> bool:
        """
        Restarts a service. Returns False if the restart did not succeed.
        """
        pass
